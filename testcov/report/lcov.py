"""Reading and writing the LCOV text format (line data only)."""

from .errors import ReportParseError
from .models import CoverageReport, FileRecord, LineData


def format_lcov(report: CoverageReport) -> str:
    """Serialize a report as LCOV.

    Each record becomes ``SF``, one ``DA`` per line, ``LF``/``LH`` totals and
    ``end_of_record``.
    """
    lines: list[str] = []
    for record in report.records:
        lines.append(f"SF:{record.source_file}")
        if record.lines is not None:
            for data in record.lines:
                lines.append(f"DA:{data.line},{data.count}")
            lines.append(f"LF:{record.lines_found}")
            lines.append(f"LH:{record.lines_hit}")
        lines.append("end_of_record")
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def parse_lcov(text: str) -> CoverageReport:
    """Parse LCOV text into a CoverageReport.

    Records without any ``DA`` entry keep ``lines`` as None. Tags other than
    ``SF``, ``DA`` and ``end_of_record`` are ignored.

    Raises:
        ReportParseError: On a malformed ``DA`` entry, a duplicate line in a
            record, or data outside of a record.
    """
    report = CoverageReport()
    current: FileRecord | None = None
    seen: set[int] = set()

    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if line.startswith("SF:"):
            current = FileRecord(source_file=line[3:])
            seen = set()
            report.records.append(current)

        elif line.startswith("DA:"):
            if current is None:
                raise ReportParseError("DA entry outside of a record", number)
            parts = line[3:].split(",")
            try:
                line_no = int(parts[0])
                count = int(parts[1])
            except (IndexError, ValueError) as e:
                raise ReportParseError(f"Malformed DA entry: {line}", number) from e
            if line_no < 1 or count < 0:
                raise ReportParseError(f"Invalid DA entry: {line}", number)
            if line_no in seen:
                raise ReportParseError(
                    f"Duplicate line {line_no} in {current.source_file}", number
                )
            seen.add(line_no)
            if current.lines is None:
                current.lines = []
            current.lines.append(LineData(line=line_no, count=count))

        elif line == "end_of_record":
            current = None

    return report
