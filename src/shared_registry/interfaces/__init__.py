# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Protocols describing the registry contracts consumed across the package."""

from __future__ import annotations

from .registry import InstanceRegistry, RegistryInfo, ValueConstructor

__all__ = ["InstanceRegistry", "RegistryInfo", "ValueConstructor"]
