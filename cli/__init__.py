"""
Participle Atlas - Command Line Interface

Main CLI entry point for the dataset build.
"""
from cli.main import app, main

__all__ = ["app", "main"]
