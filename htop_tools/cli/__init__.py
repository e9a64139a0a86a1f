# Copyright 2025 Ilya Makarov
#
# Licensed under the Business Source License 1.1
# Change Date: 2028-11-05
# Change License: Apache License 2.0
# htop-tools CLI Module

from htop_tools.cli.main import EXAMPLES, cli

__all__ = [
    "EXAMPLES",
    "cli",
]
