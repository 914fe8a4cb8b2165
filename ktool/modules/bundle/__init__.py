"""
Bundle Module - Black Box Interface

Purpose: Collect a Konnector support bundle from one namespace
Interface: SupportBundleCollector.collect() -> BundleResult, Target
Hidden: section ordering, staging directory lifecycle, archive format

Per-artifact failures never stop a run. Only missing tools, a missing
namespace, or a failed archive end it early, and the staging directory is
removed on every exit path.
"""

from .assembler import archive
from .models import BundleResult, SectionResult, Target
from .orchestrator import SupportBundleCollector
from .sections import SECTIONS, SectionContext
from .staging import StagingRoot, bundle_name

__all__ = [
    "BundleResult",
    "SECTIONS",
    "SectionContext",
    "SectionResult",
    "StagingRoot",
    "SupportBundleCollector",
    "Target",
    "archive",
    "bundle_name",
]
