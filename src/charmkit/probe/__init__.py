# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Capability probing: generate, build, run and parse the inspect program."""

from __future__ import annotations

from .compiler import GoCompiler, ProbeCompiler, executable_path
from .models import CapabilityDescriptor, OptionDescriptor, RelationDescriptor
from .prober import parse_probe_output, probe_capabilities
from .template import PROBE_NAME, render_probe_source

__all__ = [
    "PROBE_NAME",
    "CapabilityDescriptor",
    "GoCompiler",
    "OptionDescriptor",
    "ProbeCompiler",
    "RelationDescriptor",
    "executable_path",
    "parse_probe_output",
    "probe_capabilities",
    "render_probe_source",
]
