"""Exception hierarchy for preview_fit."""

from __future__ import annotations


class PreviewFitError(Exception):
    """Base class for every error raised by preview_fit."""


class PreviewGeometryError(PreviewFitError, ValueError):
    """Geometry helper called with arguments it cannot work with."""


class EmptyCandidateSetError(PreviewGeometryError):
    """No candidate resolutions were supplied."""


class InvalidDimensionsError(PreviewGeometryError):
    """A width or height was zero, negative or not an integer."""


class InvalidRotationError(PreviewGeometryError):
    """A rotation value outside 0/90/180/270."""


class CameraSelectionError(PreviewFitError):
    """None of the described cameras can be used for preview."""


class PreviewInputError(PreviewFitError):
    """An input file or setting could not be read or used."""


class InvalidImageError(PreviewInputError):
    """A still image could not be read or normalized."""


class ConfigError(PreviewInputError):
    """A preference value is unknown, malformed or could not be stored."""


__all__ = [
    "PreviewFitError",
    "PreviewGeometryError",
    "EmptyCandidateSetError",
    "InvalidDimensionsError",
    "InvalidRotationError",
    "CameraSelectionError",
    "PreviewInputError",
    "InvalidImageError",
    "ConfigError",
]
