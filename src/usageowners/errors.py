from __future__ import annotations


class UsageOwnersError(Exception):
    """Base exception for usageowners."""


class ManifestUnavailable(UsageOwnersError):
    """The CODEOWNERS manifest could not be read."""


class ReportUnavailable(UsageOwnersError):
    """The usage report file could not be read or decoded."""


class MalformedReportShape(UsageOwnersError):
    """The usage report is not a mapping of component -> instances."""


class UsageError(UsageOwnersError):
    """Invalid CLI usage (user error)."""
