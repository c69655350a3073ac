"""Comware to Aruba AOS-CX configuration converter."""

from __future__ import annotations

from comware_aruba.converter import ComwareToArubaConverter, ConversionResult, convert

__all__ = ["ComwareToArubaConverter", "ConversionResult", "convert"]
