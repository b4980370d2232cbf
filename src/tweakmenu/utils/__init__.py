"""Utility helpers for Tweak Menu."""

from .json_codec import DecodeError, EncodeError, JsonError, decode, encode

__all__ = ["DecodeError", "EncodeError", "JsonError", "decode", "encode"]
