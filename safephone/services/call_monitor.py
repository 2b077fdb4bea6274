import logging
from typing import AsyncIterable, AsyncIterator

from safephone.core.phone_checker import check_phone
from safephone.schemas import PhoneCheck
from safephone.services.report_store import CommunityReportStore

logger = logging.getLogger(__name__)


async def watch_incoming_calls(
    store: CommunityReportStore,
    numbers: AsyncIterable[str],
) -> AsyncIterator[PhoneCheck]:
    """
    Look up every incoming number from the call-event source.
    Events without a number (hidden caller ID) are skipped.
    """
    async for raw_number in numbers:
        if not raw_number or not raw_number.strip():
            logger.debug("Incoming call without a number, skipped")
            continue

        result = await check_phone(store, raw_number)
        if result.is_reported:
            logger.warning(f"🚨 Incoming call from a reported number ({result.count} reports)")
        yield result
