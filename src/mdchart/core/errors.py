"""Custom exceptions for mdchart."""


from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from mdchart.dsl.definition import Diagnostic


class MdChartError(Exception):
    """Base exception for the project."""


class ConfigError(MdChartError):
    """Raised when configuration files are missing/invalid."""


class UnsupportedChartType(MdChartError):
    """Raised when a chart type keyword is not one of the known kinds."""


class ChartSyntaxError(MdChartError):
    """
    Raised when DSL text cannot be turned into charts.

    Carries every diagnostic collected during the scan; the message is
    the bulleted list shown to users.
    """

    def __init__(self, diagnostics: Sequence["Diagnostic"]) -> None:
        self.diagnostics = list(diagnostics)
        bullets = "\n".join(f"• {d}" for d in self.diagnostics)
        super().__init__(f"invalid chart definition:\n{bullets}")
