"""
This module provides a plugin system for decoding tables from byte streams.
Each reader handles one format, selected by a tag in the run configuration.
New readers are picked up by adding a module to the ``readers`` package.
"""
