# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Public import surface for the Perl tags generator."""

from ptags.context import ScanContext
from ptags.locator import IncludePathLocator, ModuleLocator
from ptags.recognizers import (
    InclusionRecognizer,
    PackageRecognizer,
    Recognizer,
    SubroutineRecognizer,
    VariableRecognizer,
    default_recognizers,
)
from ptags.tag import Inclusion, Tag, TagInvariantError
from ptags.tagger import Tagger, TaggerOptions, TagsInputError

__all__ = [
    "IncludePathLocator",
    "Inclusion",
    "InclusionRecognizer",
    "ModuleLocator",
    "PackageRecognizer",
    "Recognizer",
    "ScanContext",
    "SubroutineRecognizer",
    "Tag",
    "TagInvariantError",
    "Tagger",
    "TaggerOptions",
    "TagsInputError",
    "VariableRecognizer",
    "default_recognizers",
]
