"""Core pipeline for glyphpack.

This module contains the stages of the upload-to-archive pipeline:

- Upload intake (type check, identifier assignment, storage)
- Mapping validation (fail-fast resolution against the glyph store)
- Synthesis orchestration (isolated working scope per request)
- Archive packaging (flat ZIP of the synthesized files)
- Delivery cleanup (ArchiveLease releases scope and archive once)
- Bulk cleanup (purge of the glyph store)

Key classes:
- UploadIntake: Validates and stores uploaded SVG files
- MappingValidator: Resolves glyph mappings
- FontSynthesizer: Protocol for font builders
- FontToolsSynthesizer: fonttools-based font builder
- SynthesisOrchestrator: Runs synthesis and packaging in a working scope
- ArchivePackager: Zips a working scope
- ArchiveLease: Owns one request's transient files
- BulkCleanup: Purges the glyph store
- FontBundlePipeline: Entry point tying the stages together
"""

from glyphpack.core.cleanup import BulkCleanup
from glyphpack.core.intake import UploadCandidate, UploadIntake
from glyphpack.core.packager import ArchivePackager
from glyphpack.core.pipeline import (
    ArchiveLease,
    FontBundlePipeline,
    SynthesisOrchestrator,
)
from glyphpack.core.synthesizer import (
    FontSynthesizer,
    FontToolsSynthesizer,
    glyph_name_for,
)
from glyphpack.core.validator import MappingValidator

__all__ = [
    "ArchiveLease",
    "ArchivePackager",
    "BulkCleanup",
    "FontBundlePipeline",
    "FontSynthesizer",
    "FontToolsSynthesizer",
    "MappingValidator",
    "SynthesisOrchestrator",
    "UploadCandidate",
    "UploadIntake",
    "glyph_name_for",
]
