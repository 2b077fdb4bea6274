import asyncio
import json
import logging
import time
from typing import Any, Callable, Dict, Iterable, List, Optional

import requests
from pydantic import ValidationError

from safephone.core.normalize import normalize_email, normalize_phone
from safephone.schemas import ReportedPhone, SyncResult
from safephone.services.storage import KeyValueStorage

logger = logging.getLogger(__name__)

EMAIL_KEY = 'reported_emails'
PHONE_KEY = 'reported_phones'          # legacy flat list of numbers
PHONE_MAP_KEY = 'reported_phones_v2'   # {number: {number, count, updatedAt}}


def now_ms() -> int:
    return int(time.time() * 1000)


def merge_reports(
    current: Dict[str, ReportedPhone],
    incoming: Iterable[Any],
    timestamp_ms: int,
) -> Dict[str, ReportedPhone]:
    """
    Last-write-wins merge of remote records into the local map.
    A remote record replaces the local one only when its updatedAt is
    strictly newer. Malformed remote entries are skipped.
    """
    merged = dict(current)
    for entry in incoming:
        if not isinstance(entry, dict):
            continue
        number = normalize_phone(str(entry.get('number') or ''))
        if not number:
            continue
        try:
            updated_at = int(entry['updatedAt']) if entry.get('updatedAt') else None
            count = max(1, int(entry.get('count') or 1))
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"Skipped malformed remote report for {number}")
            continue

        existing = merged.get(number)
        if existing is None:
            merged[number] = ReportedPhone(
                number=number, count=count, updated_at=updated_at or timestamp_ms
            )
        elif updated_at is not None and updated_at > existing.updated_at:
            merged[number] = ReportedPhone(number=number, count=count, updated_at=updated_at)
    return merged


class CommunityReportStore:
    """
    Locally persisted community reports: phone numbers with counts and
    a set of email addresses. Storage errors are logged and treated as
    "no stored data"; nothing here raises to the caller.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        endpoint: Optional[str] = None,
        http_session: Optional[requests.Session] = None,
        timeout: int = 10,
        clock: Callable[[], int] = now_ms,
    ):
        self.storage = storage
        self.endpoint = endpoint
        self.timeout = timeout
        self.clock = clock

        self.http_session = http_session or requests.Session()
        self.http_session.headers.update({'User-Agent': 'SafePhone-DR/1.0'})

        # The phone map is one blob: every read-modify-write goes through this lock
        self._phone_lock = asyncio.Lock()
        self._email_lock = asyncio.Lock()

    # ── PHONE MAP PERSISTENCE ────────────────────────────────
    # Callers hold _phone_lock: the first read may persist a migration.
    async def _load_legacy_phone_list(self) -> List[str]:
        raw = await self.storage.get_item(PHONE_KEY)
        if not raw:
            return []
        parsed = json.loads(raw)
        return [p for p in parsed if isinstance(p, str)] if isinstance(parsed, list) else []

    async def _read_phone_map(self) -> Dict[str, ReportedPhone]:
        """
        Versioned loader: returns the v2 map, upgrading the legacy flat
        list (each entry count=1) and persisting the upgrade on first read.
        Storage and parse errors propagate.
        """
        raw = await self.storage.get_item(PHONE_MAP_KEY)
        if raw:
            parsed = json.loads(raw)
            if not isinstance(parsed, dict):
                raise ValueError(f"{PHONE_MAP_KEY} is not a JSON object")
            return self._parse_phone_map(parsed)

        legacy = await self._load_legacy_phone_list()
        migrated: Dict[str, ReportedPhone] = {}
        timestamp = self.clock()
        for phone in legacy:
            number = normalize_phone(phone)
            if number:
                migrated[number] = ReportedPhone(number=number, count=1, updated_at=timestamp)
        if legacy:
            logger.info(f"Migrated {len(migrated)} legacy phone reports to the count map")
        await self._save_phone_map(migrated)
        return migrated

    async def _load_phone_map(self) -> Dict[str, ReportedPhone]:
        """Read-only view: an unreadable map counts as empty"""
        try:
            return await self._read_phone_map()
        except Exception as e:
            logger.error(f"❌ Phone report load failed, using empty map: {e}")
            return {}

    def _parse_phone_map(self, parsed: Dict[str, Any]) -> Dict[str, ReportedPhone]:
        phones: Dict[str, ReportedPhone] = {}
        for key, value in parsed.items():
            if not isinstance(value, dict):
                continue
            try:
                record = ReportedPhone.model_validate(value)
            except ValidationError as e:
                logger.warning(f"Skipped invalid stored phone report {key}: {e.error_count()} error(s)")
                continue
            number = normalize_phone(record.number) or normalize_phone(key)
            if number:
                phones[number] = record.model_copy(update={'number': number})
        return phones

    async def _save_phone_map(self, phones: Dict[str, ReportedPhone]) -> bool:
        payload = {number: record.model_dump(by_alias=True) for number, record in phones.items()}
        try:
            await self.storage.set_item(PHONE_MAP_KEY, json.dumps(payload))
            return True
        except Exception as e:
            logger.error(f"❌ Phone report save failed: {e}")
            return False

    # ── EMAIL SET PERSISTENCE ────────────────────────────────
    async def _read_email_list(self) -> List[str]:
        raw = await self.storage.get_item(EMAIL_KEY)
        if not raw:
            return []
        parsed = json.loads(raw)
        if not isinstance(parsed, list):
            raise ValueError(f"{EMAIL_KEY} is not a JSON list")
        return [e for e in parsed if isinstance(e, str)]

    async def _load_email_list(self) -> List[str]:
        try:
            return await self._read_email_list()
        except Exception as e:
            logger.error(f"❌ Email report load failed, using empty list: {e}")
            return []

    async def _save_email_list(self, emails: List[str]) -> bool:
        try:
            await self.storage.set_item(EMAIL_KEY, json.dumps(emails))
            return True
        except Exception as e:
            logger.error(f"❌ Email report save failed: {e}")
            return False

    # ── PUBLIC OPERATIONS ────────────────────────────────────
    async def report_phone(self, raw_number: str) -> Optional[ReportedPhone]:
        """
        Create the record with count=1, or bump count and updatedAt.
        Returns None for an empty number or when the report could not be
        stored. An unreadable map is never overwritten.
        """
        number = normalize_phone(raw_number)
        if not number:
            return None

        async with self._phone_lock:
            try:
                phones = await self._read_phone_map()
            except Exception as e:
                logger.error(f"❌ Phone report not stored, existing reports unreadable: {e}")
                return None

            existing = phones.get(number)
            if existing:
                record = ReportedPhone(number=number, count=existing.count + 1, updated_at=self.clock())
            else:
                record = ReportedPhone(number=number, count=1, updated_at=self.clock())
            phones[number] = record
            if not await self._save_phone_map(phones):
                return None

        logger.info(f"Phone report stored (count={record.count})")
        return record

    async def report_email(self, raw_email: str) -> bool:
        """
        True when the email is in the reported set afterwards (newly
        added or already there). False when empty or not stored.
        """
        email = normalize_email(raw_email)
        if not email:
            return False

        async with self._email_lock:
            try:
                emails = await self._read_email_list()
            except Exception as e:
                logger.error(f"❌ Email report not stored, existing reports unreadable: {e}")
                return False
            if email in emails:
                return True
            emails.append(email)
            return await self._save_email_list(emails)

    async def lookup_phone(self, raw_number: str) -> Optional[ReportedPhone]:
        number = normalize_phone(raw_number)
        if not number:
            return None
        async with self._phone_lock:
            phones = await self._load_phone_map()
        return phones.get(number)

    async def is_phone_reported(self, raw_number: str) -> bool:
        return await self.lookup_phone(raw_number) is not None

    async def is_email_reported(self, raw_email: str) -> bool:
        email = normalize_email(raw_email)
        if not email:
            return False
        return email in await self._load_email_list()

    async def list_phones(self) -> List[ReportedPhone]:
        async with self._phone_lock:
            phones = await self._load_phone_map()
        return list(phones.values())

    async def list_emails(self) -> List[str]:
        return await self._load_email_list()

    # ── REMOTE SYNC ──────────────────────────────────────────
    async def _merge_remote(self, remote: List[Any]) -> bool:
        """Merge against a fresh read so concurrent local reports survive"""
        async with self._phone_lock:
            try:
                current = await self._read_phone_map()
            except Exception as e:
                logger.error(f"❌ Remote reports not merged, local reports unreadable: {e}")
                return False
            merged = merge_reports(current, remote, self.clock())
            return await self._save_phone_map(merged)

    async def sync_phones(self, endpoint: Optional[str] = None) -> SyncResult:
        """
        Best-effort two-way sync: push the local map, then pull and merge.
        Network and payload errors are logged and skipped; on failure the
        local map is left as it was.
        """
        endpoint = endpoint or self.endpoint
        result = SyncResult()
        if not endpoint:
            return result

        async with self._phone_lock:
            snapshot = await self._load_phone_map()
        payload = {'phones': [record.model_dump(by_alias=True) for record in snapshot.values()]}

        try:
            response = await asyncio.to_thread(
                self.http_session.post, endpoint, json=payload, timeout=self.timeout
            )
            if response.ok:
                result.pushed = len(payload['phones'])
            else:
                logger.warning(f"⚠️ Report push rejected ({response.status_code})")
        except requests.RequestException as e:
            logger.warning(f"⚠️ Report push failed: {e}")

        try:
            response = await asyncio.to_thread(self.http_session.get, endpoint, timeout=self.timeout)
            if response.ok:
                data = response.json()
                remote = data.get('phones') if isinstance(data, dict) else None
                if isinstance(remote, list):
                    if await self._merge_remote(remote):
                        result.pulled = len(remote)
            else:
                logger.warning(f"⚠️ Report pull rejected ({response.status_code})")
        except requests.RequestException as e:
            logger.warning(f"⚠️ Report pull failed: {e}")
        except ValueError as e:
            logger.warning(f"⚠️ Report pull returned invalid JSON: {e}")

        logger.info(f"Report sync finished: pushed={result.pushed} pulled={result.pulled}")
        return result
