"""Command line (python -m frontend) and Flask front ends for the corpus analysis engine."""
