# SPDX-License-Identifier: MPL-2.0
"""
rootsig - Main entry point for the CLI.

This module provides the command-line interface for the rootsig package.
"""

from rootsig.cli.main import cli

if __name__ == "__main__":
    cli()
