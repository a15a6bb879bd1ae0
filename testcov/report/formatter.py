"""Turning a HitMap into an LCOV report scoped to the package sources."""

import logging
from pathlib import Path
from typing import Iterable, Mapping
from urllib.parse import urlparse
from urllib.request import url2pathname

from .lcov import format_lcov
from .models import CoverageReport, FileRecord, LineData

logger = logging.getLogger(__name__)

COVERAGE_DIR = "coverage"
REPORT_FILE = "lcov.info"


class Resolver:
    """Maps source locations reported by the runtime to package-relative paths."""

    def __init__(self, package_root: str | Path):
        self.package_root = Path(package_root).resolve()

    def resolve(self, source: str) -> str | None:
        """Return the posix path of ``source`` relative to the package root.

        ``source`` may be a filesystem path or a ``file://`` URI. Sources
        outside the package root resolve to None.
        """
        if source.startswith("file://"):
            path = Path(url2pathname(urlparse(source).path))
        else:
            path = Path(source)
        if not path.is_absolute():
            path = self.package_root / path
        try:
            return path.resolve().relative_to(self.package_root).as_posix()
        except ValueError:
            return None


def _normalize_prefix(prefix: str) -> str:
    prefix = prefix.replace("\\", "/")
    while prefix.startswith("./"):
        prefix = prefix[2:]
    return prefix


class LcovFormatter:
    """Builds LCOV text from a HitMap.

    Only files whose resolved path starts with one of ``report_on`` are kept;
    an empty ``report_on`` keeps every file inside the package root.
    """

    def __init__(self, resolver: Resolver, report_on: Iterable[str] = ("src/",)):
        self.resolver = resolver
        self.report_on = tuple(_normalize_prefix(p) for p in report_on)

    def _included(self, path: str) -> bool:
        if not self.report_on:
            return True
        return any(path.startswith(prefix) for prefix in self.report_on)

    def build_report(self, hitmap: Mapping[str, Mapping[int, int]]) -> CoverageReport:
        """Filter and order the hit map into a CoverageReport."""
        merged: dict[str, dict[int, int]] = {}
        for source, lines in hitmap.items():
            path = self.resolver.resolve(source)
            if path is None or not self._included(path):
                logger.debug("Not reporting on %s", source)
                continue
            target = merged.setdefault(path, {})
            for line, count in lines.items():
                target[line] = target.get(line, 0) + count

        report = CoverageReport()
        for path in sorted(merged):
            report.records.append(
                FileRecord(
                    source_file=path,
                    lines=[
                        LineData(line=line, count=count)
                        for line, count in sorted(merged[path].items())
                    ],
                )
            )
        return report

    def format(self, hitmap: Mapping[str, Mapping[int, int]]) -> str:
        return format_lcov(self.build_report(hitmap))


def report_path(package_root: str | Path) -> Path:
    """Location of the LCOV report for a package."""
    return Path(package_root).absolute() / COVERAGE_DIR / REPORT_FILE


def write_report(
    package_root: str | Path,
    hitmap: Mapping[str, Mapping[int, int]],
    report_on: Iterable[str] = ("src/",),
) -> Path:
    """Write ``coverage/lcov.info`` for the given hit map.

    The ``coverage`` directory is created when missing; an existing report
    is overwritten.

    Returns:
        Path of the written report.
    """
    formatter = LcovFormatter(Resolver(package_root), report_on=report_on)
    content = formatter.format(hitmap)
    path = report_path(package_root)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote coverage report to %s", path)
    return path
