"""ContractCompiler for reactive-contracts.

Runs every contract of a project through the pipeline

    load -> validate -> analyze latency -> generate

and aggregates a CompileResult. Failures are per contract: an invalid
contract skips generation and flips ``success`` but never stops the
batch. Nothing is raised to the caller except DiscoveryError.

Two modes:
- compile_all: discover every source with the configured glob
- compile_file: recompile one changed source (hot reload), reporting
  which generated files changed so callers can invalidate them
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, NamedTuple

import structlog

from rcontracts_core.analyzer import analyze_latency
from rcontracts_core.compiler.discovery import FileDiscovery, GlobFileDiscovery
from rcontracts_core.compiler.loader import ModuleLoader, PythonModuleLoader
from rcontracts_core.errors import ContractLoadError, DiscoveryError, GenerationError
from rcontracts_core.generator import (
    generate_consumer_types,
    generate_provider_stub,
    generate_runtime_negotiator,
    get_generated_files_for_contract,
)
from rcontracts_core.models import (
    CompilationResult,
    CompileResult,
    GeneratedArtifacts,
    LatencyAnalysis,
    LatencyStatus,
    ValidationResult,
)
from rcontracts_core.schemas import CompilerConfig, Contract
from rcontracts_core.validator import validate_contract


class LoadedContract(NamedTuple):
    """A contract exported by a source file."""

    source_path: str
    export_name: str
    contract: Contract


class ContractCompiler:
    """Compile contract sources into consumer, provider and runtime artifacts.

    Collaborators are injected so the compiler never touches the
    filesystem for discovery or loading on its own:

    - file_discovery: resolves the contracts glob to source paths
    - module_loader: turns a source path into exported contracts

    Recompiles triggered by hot reload and batch compiles are not
    serialized here; callers run them one at a time.

    Example:
        >>> compiler = ContractCompiler(CompilerConfig(), "/app")
        >>> result = compiler.compile_all()
        >>> result.success
        True
    """

    def __init__(
        self,
        config: CompilerConfig | None = None,
        cwd: Path | str | None = None,
        *,
        file_discovery: FileDiscovery | None = None,
        module_loader: ModuleLoader | None = None,
        logger: Any | None = None,
    ) -> None:
        """Initialize the compiler.

        Args:
            config: Compiler configuration. Defaults to CompilerConfig().
            cwd: Project root. Defaults to the current directory.
            file_discovery: Source discovery. Defaults to GlobFileDiscovery.
            module_loader: Source loader. Defaults to PythonModuleLoader.
            logger: structlog-compatible logger. Defaults to the module logger.
        """
        self.config = config or CompilerConfig()
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        self.file_discovery = file_discovery or GlobFileDiscovery()
        self.module_loader = module_loader or PythonModuleLoader()
        self._log = (logger or structlog.get_logger(__name__)).bind(component="contract_compiler")

    def compile_all(self) -> CompileResult:
        """Compile every contract source matched by the configured glob.

        Returns:
            Aggregated CompileResult.

        Raises:
            DiscoveryError: If source discovery itself fails.
        """
        pattern = self.config.contracts
        self._log.info("compilation_started", pattern=pattern, cwd=str(self.cwd))

        paths = self.discover()
        if not paths:
            self._log.warning("no_contract_files", pattern=pattern)
            return CompileResult(
                success=False,
                errors=[f"No contract files found matching {pattern}"],
            )

        self._log.info("contract_files_discovered", count=len(paths))
        result = self._compile_paths(paths)
        self._log.info(
            "compilation_finished",
            success=result.success,
            contracts=len(result.results),
            errors=len(result.errors),
            warnings=len(result.warnings),
        )
        return result

    def compile_file(self, path: Path | str) -> CompileResult:
        """Recompile a single contract source.

        No rediscovery happens; only the given file is loaded. The
        ``changed_files`` of the returned result lists every generated
        path whose content changed.

        Args:
            path: Source file, absolute or relative to cwd.

        Returns:
            CompileResult for the contracts in that file.
        """
        self._log.info("incremental_compilation_started", path=str(path))
        result = self._compile_paths([str(path)])
        self._log.info(
            "incremental_compilation_finished",
            path=str(path),
            success=result.success,
            changed=len(result.changed_files),
        )
        return result

    def compile_contract(
        self,
        contract: Contract,
        *,
        source_path: str | None = None,
        export_name: str | None = None,
    ) -> CompilationResult:
        """Validate, analyze and generate artifacts for one contract.

        Args:
            contract: Contract to compile.
            source_path: File the contract came from, if any.
            export_name: Attribute the contract was exported as, if any.

        Returns:
            CompilationResult. Generation is skipped when validation fails
            or, with strictLatency, when latency analysis reports an error.
        """
        log = self._log.bind(contract=contract.name)
        validation, latency = self.check_contract(contract)
        _log_latency(latency, log)

        if not validation.valid:
            log.warning("contract_invalid", errors=validation.errors)
            return CompilationResult(
                contract=contract,
                validation=validation,
                latency=latency,
                source_path=source_path,
                export_name=export_name,
            )

        generated, generation_errors = self._generate(contract, log)
        if generation_errors:
            validation = validation.with_errors(*generation_errors)
        else:
            log.info("contract_generated", changed=len(generated.changed))

        return CompilationResult(
            contract=contract,
            validation=validation,
            latency=latency,
            generated=generated,
            source_path=source_path,
            export_name=export_name,
        )

    def check_contract(self, contract: Contract) -> tuple[ValidationResult, LatencyAnalysis]:
        """Validate and analyze a contract without generating anything.

        With strictLatency, a latency analysis error is added to the
        validation errors.

        Args:
            contract: Contract to check.

        Returns:
            Tuple of (ValidationResult, LatencyAnalysis).
        """
        validation = validate_contract(contract, self.config.validation)
        latency = analyze_latency(contract)

        if self.config.validation.strict_latency and latency.status is LatencyStatus.ERROR:
            validation = validation.with_errors(f"Latency analysis failed: {latency.message}")

        return validation, latency

    def discover(self) -> list[str]:
        """Return the contract sources matched by the configured glob.

        Raises:
            DiscoveryError: If source discovery itself fails.
        """
        pattern = self.config.contracts
        try:
            return self.file_discovery.discover(pattern, self.cwd)
        except DiscoveryError:
            raise
        except OSError as e:
            raise DiscoveryError(
                f"Cannot resolve contracts pattern: {pattern}",
                pattern=pattern,
                internal_details=repr(e),
            ) from e

    def load_source(self, path: str) -> tuple[list[LoadedContract], list[str]]:
        """Load the contracts exported by one source file.

        Args:
            path: Source file, absolute or relative to cwd.

        Returns:
            Tuple of (loaded contracts, file-level errors).
        """
        log = self._log.bind(path=path)

        try:
            exported = self.module_loader.load(self.cwd / path)
        except ContractLoadError as e:
            log.error("contract_file_failed", error=e.user_message)
            return [], [e.user_message]
        except Exception as e:
            log.error("contract_file_failed", error=str(e))
            return [], [f"Failed to load {path}: {e}"]

        if not exported:
            log.warning("contract_file_empty")
            return [], [f"No contract found in {path}"]

        return [LoadedContract(path, name, contract) for name, contract in exported], []

    def _compile_paths(self, paths: list[str]) -> CompileResult:
        results: list[CompilationResult] = []
        errors: list[str] = []
        warnings: list[str] = []

        for path in paths:
            loaded, file_errors = self.load_source(path)
            errors.extend(file_errors)
            for item in loaded:
                result = self.compile_contract(
                    item.contract,
                    source_path=item.source_path,
                    export_name=item.export_name,
                )
                results.append(result)
                name = result.contract.name
                warnings.extend(f"{name}: {warning}" for warning in result.validation.warnings)
                if not result.validation.valid:
                    errors.append(
                        f"Validation failed for {name}: {'; '.join(result.validation.errors)}"
                    )

        return CompileResult(
            success=not errors,
            results=results,
            errors=errors,
            warnings=warnings,
        )

    def _generate(self, contract: Contract, log: Any) -> tuple[GeneratedArtifacts, list[str]]:
        paths = get_generated_files_for_contract(contract.name, self.config, self.cwd)
        emitters = (
            ("frontend", generate_consumer_types, paths.frontend),
            ("backend", generate_provider_stub, paths.backend),
            ("runtime", generate_runtime_negotiator, paths.runtime),
        )

        written: dict[str, str] = {}
        changed: list[str] = []
        errors: list[str] = []

        for target, emit, output_path in emitters:
            try:
                if emit(contract, output_path):
                    changed.append(str(output_path))
                written[target] = str(output_path)
            except GenerationError as e:
                log.error("artifact_generation_failed", target=target, path=str(output_path))
                errors.append(f"Generation failed for {target} artifact: {e.user_message}")

        return GeneratedArtifacts(**written, changed=changed), errors


def _log_latency(latency: LatencyAnalysis, log: Any) -> None:
    if latency.status is LatencyStatus.ERROR:
        log.warning("latency_infeasible", message=latency.message)
    elif latency.status is LatencyStatus.WARNING:
        log.info("latency_at_risk", message=latency.message)
    for suggestion in latency.suggestions:
        log.debug("latency_suggestion", suggestion=suggestion)


def compile_all(
    config: CompilerConfig,
    cwd: Path | str,
    file_discovery: FileDiscovery | None = None,
    module_loader: ModuleLoader | None = None,
    logger: Any | None = None,
) -> CompileResult:
    """Compile every contract in a project.

    Args:
        config: Compiler configuration.
        cwd: Project root.
        file_discovery: Optional source discovery.
        module_loader: Optional source loader.
        logger: Optional structlog-compatible logger.

    Returns:
        Aggregated CompileResult.

    Raises:
        DiscoveryError: If source discovery itself fails.
    """
    compiler = ContractCompiler(
        config,
        cwd,
        file_discovery=file_discovery,
        module_loader=module_loader,
        logger=logger,
    )
    return compiler.compile_all()


def compile_one(
    contract: Contract,
    config: CompilerConfig,
    cwd: Path | str,
) -> CompilationResult:
    """Compile a single contract instance.

    Example:
        >>> result = compile_one(UserProfileContract, CompilerConfig(), "/app")
        >>> result.generated.frontend
        '/app/generated/frontend/user_profile.py'
    """
    return ContractCompiler(config, cwd).compile_contract(contract)
