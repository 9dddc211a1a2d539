"""Loading of the published test suite."""

import logging
from collections.abc import Sequence

from dpi_probe.models.suite import Test
from dpi_probe.suite_parser import SUITE_MARKER, extract_array, parse_suite
from dpi_probe.transfers.base import DocumentFetchError, TransferEngine

log = logging.getLogger(__name__)


async def load_suite(
    engine: TransferEngine, url: str, current: Sequence[Test]
) -> Sequence[Test]:
    """Load the test suite published at ``url``.

    Failures are soft: when the document cannot be fetched or holds no
    ``TEST_SUITE`` array, ``current`` is returned as is. Once the array is
    found it replaces the suite, even when no record in it is usable.

    Args:
        engine: Transfer engine used to fetch the document
        url: URL of the suite document
        current: Suite to keep when loading fails

    Returns:
        The freshly parsed suite, possibly empty, or ``current`` unchanged.

    """
    log.info("Loading test suite from %s", url)
    try:
        document = await engine.fetch_text(url)
    except DocumentFetchError as e:
        log.warning("Could not fetch test suite, keeping %d test(s): %s", len(current), e)
        return current

    if (array_text := extract_array(document, SUITE_MARKER)) is None:
        log.warning(
            "No %s array found in suite document, keeping %d test(s)",
            SUITE_MARKER,
            len(current),
        )
        return current

    tests = tuple(parse_suite(array_text))
    if not tests:
        log.warning("Suite document holds no usable test")

    log.info("Loaded %d test(s) from suite document", len(tests))
    return tests
