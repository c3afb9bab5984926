#!/usr/bin/env python3
"""
Core functionality for heightmesh CLI tools.

This module provides shared functionality used across the command-line
tools, such as console output and configuration management.
"""

# Re-export key functionality to make imports easier
from heightmesh.cli.core.ui import (
    console,
    print_warning,
    print_error,
    print_success,
    print_info,
    print_rich_table,
    setup_logging,
    exit_on_error
)

from heightmesh.cli.core.config import (
    load_config,
    save_config,
    get_config_value,
    set_config_value,
    reset_config
)
