"""
Enumerator Module - Black Box Interface

Purpose: Discover the names of resources in a namespace
Interface: ResourceEnumerator.list_names(), ResourceEnumerator.list_containers()
Hidden: jsonpath templates, output parsing

An empty list means "nothing to act on". A failed query also yields an
empty list; the failure is only visible in debug logs.
"""

from .enumerator import ResourceEnumerator

__all__ = ["ResourceEnumerator"]
