"""Drives a generation run: one include at a time, base output then each locale."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from jinja2 import Environment

from .config import GenerationConfig, IncludeConfig
from .context import RunContext
from .emitters import CppRenderer, HeaderInfo, JavaRenderer, PropertiesRenderer, create_environment
from .emitters.cpp import cpp_file_names, validate_bundle
from .emitters.java import java_file_name
from .emitters.properties import PROPERTIES_SUFFIX, properties_file_name
from .errors import GenerationError, LocaleSetError, ResgenError
from .loader import load_path
from .locales import (
    Locale,
    derive_from_filename,
    parse_locale,
    parse_locale_list,
    strip_locale_suffix,
)
from .logging import collect_warnings, get_logger
from .models import ResourceBundle
from .paths import class_name_for, cpp_class_name_for, package_directory
from .shapes import ConstructorShapeProvider, StaticShapeTable
from .staleness import (
    StalenessDecision,
    all_up_to_date,
    check_locale_properties,
    is_read_only,
    is_up_to_date,
)

XML_SUFFIX = ".xml"

Rendered = Union[str, bytes]


@dataclass
class IncludeFailure:
    """An include that could not be generated, and why."""

    include: str
    message: str


@dataclass
class GenerationReport:
    """What a run wrote, skipped and complained about."""

    written: List[Path] = field(default_factory=list)
    skipped: List[Tuple[Path, str]] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    failures: List[IncludeFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


@dataclass
class _IncludeJob:
    include: IncludeConfig
    config: GenerationConfig
    source: Path
    class_name: str
    header: HeaderInfo
    java: JavaRenderer
    properties: PropertiesRenderer
    cpp: CppRenderer
    report: GenerationReport

    def directory(self, root: Optional[Path]) -> Path:
        assert root is not None
        return package_directory(root, self.class_name)


class Orchestrator:
    """Processes every include of a configuration and reports the outcome."""

    def __init__(
        self,
        *,
        shape_provider: ConstructorShapeProvider | None = None,
        environment: Environment | None = None,
        loader: Callable[[Path], ResourceBundle] | None = None,
    ) -> None:
        self.shape_provider = shape_provider
        self.environment = environment or create_environment()
        self.load = loader or load_path
        self.logger = get_logger("orchestrator")

    def run(self, config: GenerationConfig) -> GenerationReport:
        """Generate every include; a failing include does not stop the others."""
        config.validate()
        provider = self.shape_provider or StaticShapeTable.from_tokens(config.exception_shapes)
        context = RunContext(provider=provider)
        report = GenerationReport()
        java = JavaRenderer(context, style=config.style, environment=self.environment)
        properties = PropertiesRenderer(context, environment=self.environment)
        cpp = CppRenderer(environment=self.environment)

        with collect_warnings() as collector:
            for include in config.includes:
                assert config.srcdir is not None
                source = config.srcdir / include.name
                class_name = include.class_name or class_name_for(
                    include.name, _suffix_of(include.name)
                )
                try:
                    job = _IncludeJob(
                        include=include,
                        config=config,
                        source=source,
                        class_name=class_name,
                        header=HeaderInfo(source=source, scm_safe=config.scm_safe),
                        java=java,
                        properties=properties,
                        cpp=cpp,
                        report=report,
                    )
                    self._process(job)
                except (ResgenError, OSError, UnicodeError) as exc:
                    self.logger.error("Failed to generate %s: %s", include.name, exc)
                    report.failures.append(IncludeFailure(include.name, str(exc)))

        report.warnings = list(collector.messages)
        self.logger.info(
            "Generated %d file(s), %d up to date, %d failure(s)",
            len(report.written),
            len(report.skipped),
            len(report.failures),
        )
        return report

    def _process(self, job: _IncludeJob) -> None:
        name = job.include.name
        if name.endswith(XML_SUFFIX):
            self._process_bundle(job)
        elif name.endswith(PROPERTIES_SUFFIX):
            self._process_properties(job)
        else:
            raise GenerationError("Only .xml and .properties files are supported", path=job.source)

    def _process_bundle(self, job: _IncludeJob) -> None:
        bundle = self.load(job.source)
        if bundle.locale is None:
            raise GenerationError("Resource bundle must declare a locale", path=job.source)
        locales = resolve_locales(bundle.locale, job.config.locales, job.source)
        source_mtime = job.source.stat().st_mtime
        dest = job.directory(job.config.destdir)
        res = job.directory(job.config.resdir)

        if job.config.managed:
            self._emit(
                job,
                dest / java_file_name(job.class_name),
                source_mtime,
                lambda: job.java.render_base(
                    bundle,
                    class_name=job.class_name,
                    header=job.header,
                    base_class_name=job.include.base_class_name,
                ),
            )
        self._emit(
            job,
            res / properties_file_name(job.class_name),
            source_mtime,
            lambda: job.properties.render_base(bundle, class_name=job.class_name, header=job.header),
        )

        for locale in locales:
            if job.config.managed:
                self._emit_locale_class(job, locale, source_mtime)
            self._emit_locale_properties(job, locale)

        if job.config.native:
            self._emit_native(job, bundle, source_mtime)

    def _process_properties(self, job: _IncludeJob) -> None:
        locale = derive_from_filename(job.include.name, PROPERTIES_SUFFIX)
        if locale is None:
            raise GenerationError("Cannot derive a locale from the file name", path=job.source)
        assert job.config.srcdir is not None
        bundle_source = job.config.srcdir / (
            strip_locale_suffix(job.include.name, PROPERTIES_SUFFIX) + XML_SUFFIX
        )
        self.load(bundle_source)
        if job.config.managed:
            self._emit_locale_class(job, locale, job.source.stat().st_mtime)

    def _emit_locale_class(self, job: _IncludeJob, locale: Locale, source_mtime: float) -> None:
        self._emit(
            job,
            job.directory(job.config.destdir) / java_file_name(job.class_name, locale),
            source_mtime,
            lambda: job.java.render_locale(class_name=job.class_name, locale=locale, header=job.header),
        )

    def _emit_locale_properties(self, job: _IncludeJob, locale: Locale) -> None:
        file_name = properties_file_name(job.class_name, locale)
        target = job.directory(job.config.resdir) / file_name
        override = job.directory(job.config.srcdir) / file_name
        override_mtime = override.stat().st_mtime if override.exists() else 0.0
        decision = check_locale_properties(override_mtime, target, override, job.config.force)

        def render() -> Rendered:
            # Hand-maintained overrides are copied byte for byte, whatever their encoding.
            if override.exists():
                return override.read_bytes()
            return job.properties.render_locale_stub(
                class_name=job.class_name, locale=locale, header=job.header
            )

        self._write_if_stale(job, target, decision, render)

    def _emit_native(self, job: _IncludeJob, bundle: ResourceBundle, source_mtime: float) -> None:
        validate_bundle(bundle, job.source)
        cpp_class = job.include.cpp_class_name or cpp_class_name_for(job.include.name, XML_SUFFIX)
        assert job.config.destdir is not None
        header_name, impl_name = cpp_file_names(cpp_class)
        header_path = job.config.destdir / header_name
        impl_path = job.config.destdir / impl_name

        decision = all_up_to_date(source_mtime, (header_path, impl_path), job.config.force)
        if decision.up_to_date:
            for path in (header_path, impl_path):
                self._skip(job, path, f"{path} is up to date")
            return

        base_class = job.include.cpp_base_class_name
        header_text = job.cpp.render_header(
            bundle, class_name=cpp_class, header=job.header, base_class_name=base_class
        )
        impl_text = job.cpp.render_impl(
            bundle, class_name=cpp_class, header=job.header, base_class_name=base_class
        )
        self._write(job, header_path, header_text)
        self._write(job, impl_path, impl_text)

    def _emit(
        self, job: _IncludeJob, target: Path, source_mtime: float, render: Callable[[], str]
    ) -> None:
        decision = is_up_to_date(source_mtime, target, job.config.force)
        self._write_if_stale(job, target, decision, render)

    def _write_if_stale(
        self,
        job: _IncludeJob,
        target: Path,
        decision: StalenessDecision,
        render: Callable[[], Rendered],
    ) -> None:
        if decision.up_to_date:
            self._skip(job, target, decision.reason)
            return
        if is_read_only(target):
            self._skip(job, target, f"{target} is read-only")
            return
        self._write(job, target, render())

    def _skip(self, job: _IncludeJob, target: Path, reason: str) -> None:
        self.logger.info("%s", reason)
        job.report.skipped.append((target, reason))

    def _write(self, job: _IncludeJob, target: Path, content: Rendered) -> None:
        self.logger.info("Generating %s", target)
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
        job.report.written.append(target)


def resolve_locales(bundle_locale: Locale, locale_list: str | None, source: Path) -> List[Locale]:
    """Locales to generate for a bundle: the explicit list, else its own locale.

    The bundle's own locale must be part of an explicit list.
    """
    if not locale_list:
        return [bundle_locale]
    identifiers = parse_locale_list(locale_list)
    if str(bundle_locale) not in identifiers:
        raise LocaleSetError(
            f"Bundle locale '{bundle_locale}' is not in the locale list '{locale_list}'",
            path=source,
        )
    return [parse_locale(identifier) for identifier in identifiers]


def _suffix_of(name: str) -> str:
    return PROPERTIES_SUFFIX if name.endswith(PROPERTIES_SUFFIX) else XML_SUFFIX


__all__ = ["GenerationReport", "IncludeFailure", "Orchestrator", "resolve_locales"]
