"""Command-line interface for ICW."""
