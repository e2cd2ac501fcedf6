# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Source template for the Go program that reports a charm's registrations."""

from __future__ import annotations

from string import Template
from typing import Final

from ..config import ProbeSettings

PROBE_NAME: Final[str] = "inspect"

# The charmInfo struct below must stay in sync with CapabilityDescriptor.
_PROBE_TEMPLATE: Final[Template] = Template(
    """
// This file is automatically generated. Do not edit.

package main

import (
	"encoding/json"
	"os"

	charm "$charm_package"
	hook "$hook_package"
	runhook "$runhook_package"
)

type charmInfo struct {
	Hooks     map[string]bool
	Relations map[string]charm.Relation
	Config    map[string]charm.Option
}

func main() {
	r := hook.NewRegistry()
	runhook.RegisterHooks(r)
	hookMap := make(map[string]bool)
	for _, name := range r.RegisteredHooks() {
		hookMap[name] = true
	}
	data, err := json.Marshal(charmInfo{
		Hooks:     hookMap,
		Relations: r.RegisteredRelations(),
		Config:    r.RegisteredConfig(),
	})
	if err != nil {
		panic(err)
	}
	os.Stdout.Write(data)
}
"""
)


def render_probe_source(settings: ProbeSettings | None = None) -> str:
    """Return Go source for the capability probe.

    Args:
        settings: Import paths for the hook, charm and runhook packages.

    Returns:
        str: Complete ``main`` package source.
    """

    resolved = settings or ProbeSettings()
    return _PROBE_TEMPLATE.substitute(
        charm_package=resolved.charm_package,
        hook_package=resolved.hook_package,
        runhook_package=resolved.runhook_package,
    )


__all__ = ["PROBE_NAME", "render_probe_source"]
