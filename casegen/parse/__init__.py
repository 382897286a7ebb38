#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Configuration file parsing."""

from casegen.parse.config_file import ConfigFile
from casegen.parse.parser import ConfigFileParser, parse_config

__all__ = ["ConfigFile", "ConfigFileParser", "parse_config"]
