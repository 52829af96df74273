"""Compiler result models for reactive-contracts.

These are the only values the compiler hands back to its callers (CLI,
watcher, dev-server integrations):
- ValidationResult: errors and warnings for one contract
- LatencyAnalysis: feasibility of the declared latency budget
- GeneratedArtifacts: paths of the three generated files
- CompilationResult: one contract with its validation, analysis and artifacts
- CompileResult: project-wide aggregate
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field

from rcontracts_core.schemas import Contract


class ValidationResult(BaseModel):
    """Outcome of validating one contract.

    valid is exactly "no errors"; warnings never affect it.

    Attributes:
        errors: Compilation-blocking findings.
        warnings: Advisory findings.

    Example:
        >>> ValidationResult(errors=[], warnings=["Shape at root is empty"]).valid
        True
    """

    model_config = ConfigDict(frozen=True)

    errors: list[str] = Field(default_factory=list, description="Blocking findings")
    warnings: list[str] = Field(default_factory=list, description="Advisory findings")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def valid(self) -> bool:
        """Return True if there are no errors."""
        return not self.errors

    def with_errors(self, *errors: str) -> ValidationResult:
        """Return a copy with additional errors appended."""
        return self.model_copy(update={"errors": [*self.errors, *errors]})


class LatencyStatus(str, Enum):
    """Feasibility classification of a latency budget."""

    OK = "ok"
    WARNING = "warning"
    ERROR = "error"


class LatencyAnalysis(BaseModel):
    """Outcome of the latency feasibility analysis.

    Attributes:
        status: ok, warning or error.
        estimated: What the budget typically requires.
        message: Explanation of the status.
        suggestions: Advisory suggestions, independent of status.
    """

    model_config = ConfigDict(frozen=True)

    status: LatencyStatus = Field(..., description="Feasibility status")
    estimated: str | None = Field(default=None, description="Estimated requirement")
    message: str | None = Field(default=None, description="Status explanation")
    suggestions: list[str] = Field(default_factory=list, description="Advisory suggestions")


class GeneratedArtifacts(BaseModel):
    """Paths of the artifacts generated for one contract.

    Each path is None when generation was skipped or failed before it.

    Attributes:
        frontend: Consumer type module.
        backend: Provider stub module.
        runtime: Runtime negotiator descriptor.
        changed: Paths whose content differs from what was on disk.
    """

    model_config = ConfigDict(frozen=True)

    frontend: str | None = Field(default=None, description="Consumer types path")
    backend: str | None = Field(default=None, description="Provider stub path")
    runtime: str | None = Field(default=None, description="Negotiator path")
    changed: list[str] = Field(default_factory=list, description="Paths rewritten this pass")


class CompilationResult(BaseModel):
    """One contract with its validation, latency analysis and artifacts.

    Attributes:
        contract: The compiled contract.
        validation: Validation outcome, including generation failures.
        latency: Latency analysis outcome.
        generated: Generated artifact paths.
        source_path: File the contract was loaded from, if any.
        export_name: Name the contract was exported under, if any.
    """

    model_config = ConfigDict(frozen=True)

    contract: Contract
    validation: ValidationResult
    latency: LatencyAnalysis
    generated: GeneratedArtifacts = Field(default_factory=GeneratedArtifacts)
    source_path: str | None = Field(default=None, description="Contract source file")
    export_name: str | None = Field(default=None, description="Exported attribute name")


class CompileResult(BaseModel):
    """Project-wide compilation outcome.

    Attributes:
        success: True if no contract or file failed.
        results: Per-contract results, in discovery order.
        errors: File-level and per-contract error summaries.
        warnings: Concatenated validation warnings.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    results: list[CompilationResult] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def changed_files(self) -> list[str]:
        """Return every generated path rewritten during this compilation."""
        return [path for result in self.results for path in result.generated.changed]
