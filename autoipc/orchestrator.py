"""Pipeline orchestration for generate/check runs."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

from .config import ResolvedConfig, find_project_root, load_config, resolve_config
from .logging import get_logger, log_channel_summary
from .models import ChannelSpec, ParsedFileSpecs
from .parser import SpecsExtractor
from .schema_scanner import scan_schema
from .stores import LRUCache
from .validators import validate_channel_specs, validate_config
from .writers import build_writers, render_artifact, write_artifact
from .writers.imports import find_unexported_types

DEFAULT_CACHE_LIMIT = 256


@dataclass
class GenerationReport:
    """Outcome of a pipeline run."""

    config: ResolvedConfig
    corpus: List[ParsedFileSpecs] = field(default_factory=list)
    written: List[Path] = field(default_factory=list)
    stale: List[Path] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def channel_count(self) -> int:
        return sum(len(parsed.specs.channel_specs) for parsed in self.corpus)


class Orchestrator:
    """Coordinates extraction, validation and artifact rendering."""

    def __init__(
        self,
        extractor: SpecsExtractor | None = None,
        cache: LRUCache | None = None,
    ) -> None:
        self.extractor = extractor or SpecsExtractor()
        self.cache = cache if cache is not None else LRUCache(DEFAULT_CACHE_LIMIT)
        self.logger = get_logger("orchestrator")

    def run(self, path: str | Path = ".") -> GenerationReport:
        """Regenerate all artifacts for the project containing ``path``."""
        report = self._prepare(path)
        for writer in build_writers(report.config):
            report.written.append(write_artifact(writer, report.corpus))
            self.logger.debug("Wrote %s", writer.target_path)
        self.logger.info("Wrote %d artifact(s) to %s", len(report.written), report.config.ipc_data_dir)
        log_channel_summary(
            self.logger,
            "Generated bindings for",
            ((parsed.relative_path, len(parsed.specs.channel_specs)) for parsed in report.corpus),
        )
        return report

    def check(self, path: str | Path = ".") -> GenerationReport:
        """Run the pipeline without writing; artifacts that would change are reported as stale."""
        report = self._prepare(path)
        for writer in build_writers(report.config):
            target = Path(writer.target_path)
            expected = render_artifact(writer, report.corpus)
            current = target.read_text(encoding="utf-8") if target.is_file() else None
            if current != expected:
                report.stale.append(target)
        if report.stale:
            self.logger.warning("%d artifact(s) are out of date", len(report.stale))
        else:
            self.logger.info("All artifacts are up to date")
        return report

    def _prepare(self, path: str | Path) -> GenerationReport:
        start = Path(path).expanduser().resolve()
        project_root = find_project_root(start, cache=self.cache)
        self.logger.info("Starting autoipc run for %s", project_root)

        config = resolve_config(project_root, validate_config(load_config(project_root)))
        report = GenerationReport(config=config)

        if not config.schema_path.exists():
            self._warn(report, f"Schema not found at {config.schema_path}; writing empty bindings")
            return report

        schema_files = scan_schema(config.schema_path, project_root)
        self.logger.debug("Scanner discovered %d schema module(s)", len(schema_files))
        for schema_file in schema_files:
            specs = self.extractor.parse(schema_file.contents)
            self.logger.debug(
                "%s: %d channel(s), %d type(s), %d import(s)",
                schema_file.relative_path,
                len(specs.channel_specs),
                len(specs.type_specs),
                len(specs.import_specs),
            )
            if specs.channel_specs:
                report.corpus.append(
                    ParsedFileSpecs(
                        full_path=schema_file.full_path,
                        relative_path=schema_file.relative_path,
                        specs=specs,
                    )
                )

        if not report.corpus:
            self._warn(report, f"No channels declared in {config.schema_path}; writing empty bindings")
            return report

        validate_channel_specs(_all_channels(report.corpus))
        for parsed in report.corpus:
            for type_name in find_unexported_types(parsed):
                self._warn(
                    report,
                    f"Type '{type_name}' in {parsed.relative_path} is used by a channel but not "
                    "exported; the generated import of it will not compile",
                )
        return report

    def _warn(self, report: GenerationReport, message: str) -> None:
        report.warnings.append(message)
        self.logger.warning(message)


def _all_channels(corpus: Sequence[ParsedFileSpecs]) -> List[ChannelSpec]:
    return [spec for parsed in corpus for spec in parsed.specs.channel_specs]


__all__ = ["GenerationReport", "Orchestrator"]
