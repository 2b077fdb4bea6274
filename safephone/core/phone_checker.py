from typing import TYPE_CHECKING

from safephone.core.normalize import normalize_phone
from safephone.core.registry import find_bank_contact
from safephone.schemas import PhoneCheck, PhoneStatus

if TYPE_CHECKING:
    from safephone.services.report_store import CommunityReportStore

MESSAGE_REPORTED = 'Reported by users as phishing or a suspicious call'
MESSAGE_CLEAN = 'Not reported by other users'


async def check_phone(store: "CommunityReportStore", raw_number: str) -> PhoneCheck:
    """Reported if the community store has the number, else clean. No scoring."""
    number = normalize_phone(raw_number)
    report = await store.lookup_phone(number) if number else None
    contact = find_bank_contact(number)
    official_bank = contact['name'] if contact else None

    if report:
        return PhoneCheck(
            number=number,
            status=PhoneStatus.REPORTED,
            count=report.count,
            report=report,
            official_bank=official_bank,
            message=MESSAGE_REPORTED,
        )
    return PhoneCheck(
        number=number,
        status=PhoneStatus.CLEAN,
        official_bank=official_bank,
        message=MESSAGE_CLEAN,
    )
