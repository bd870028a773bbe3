"""Command line interface for the deployment board cleanup."""
