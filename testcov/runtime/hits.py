"""Conversion of coverage.py measurements into the collection wire format."""

import logging

from coverage import Coverage
from coverage.exceptions import CoverageException

logger = logging.getLogger(__name__)


def coverage_hits(cov: Coverage) -> list[dict]:
    """Build one ``{"source", "hits"}`` entry per measured file.

    ``hits`` is a flat ``[line, count, line, count, ...]`` list covering every
    executable statement of the file; statements that never ran have count 0.
    """
    result = []
    for filename in sorted(cov.get_data().measured_files()):
        try:
            _, statements, _, missing, _ = cov.analysis2(filename)
        except CoverageException as e:
            logger.debug("Skipping %s: %s", filename, e)
            continue
        missed = set(missing)
        hits: list[int] = []
        for line in statements:
            hits.extend((line, 0 if line in missed else 1))
        result.append({"source": filename, "hits": hits})
    return result
