"""
Client Margin Import - Maps already-parsed spreadsheet rows onto client margin policies.

Reading the Excel/CSV file is the caller's job; this module receives the
resulting DataFrame. Expected columns (order does not matter, aliases
from margin_config.yaml are accepted):
    - client_id / ClientID: identifier of an existing client
    - client_name / ClientName: used when the id is missing
    - marge_cible / MargeCible: target margin in % (e.g. 25)
    - vendant_cible / VendantCible: target rate in $/h (optional)

Rows for existing clients update that client's target margin and target
rate. Unknown clients are skipped. Invalid rows are reported with their
spreadsheet line number and never reach the engine.
"""
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Mapping, Optional

import pandas as pd
from rapidfuzz import fuzz, process, utils

from margin_app.config import MarginConfig, get_config
from margin_app.domain.entities import ClientMarginPolicy
from margin_app.domain.exceptions import InvalidInputError

logger = logging.getLogger(__name__)

# Header occupies line 1 of the sheet
FIRST_DATA_LINE = 2


@dataclass(frozen=True)
class ImportRowError:
    """A problem found on one line of the imported sheet."""
    line: int
    message: str
    column: Optional[str] = None


@dataclass
class PolicyImportResult:
    """Outcome of a client margin import."""
    policies: Dict[str, ClientMarginPolicy] = field(default_factory=dict)
    errors: List[ImportRowError] = field(default_factory=list)
    skipped: List[ImportRowError] = field(default_factory=list)

    @property
    def imported_count(self) -> int:
        return len(self.policies)

    @property
    def success(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        parts = [f"{self.imported_count} client(s) updated"]
        if self.skipped:
            parts.append(f"{len(self.skipped)} skipped")
        if self.errors:
            parts.append(f"{len(self.errors)} error(s)")
        return ", ".join(parts)


def resolve_columns(columns, config: MarginConfig) -> Dict[str, str]:
    """
    Map logical column names to the headers present in the sheet.

    Matching is case-insensitive and ignores surrounding spaces.
    """
    present = {str(c).strip().lower(): c for c in columns}
    resolved = {}
    for logical in ("client_id", "client_name", "target_margin_percent", "target_hourly_rate"):
        for alias in config.get_column_aliases(logical):
            if alias.strip().lower() in present:
                resolved[logical] = present[alias.strip().lower()]
                break
    return resolved


def parse_number(value) -> Optional[float]:
    """
    Parse a numeric cell.

    Handles:
        25        -> 25.0
        "25 %"    -> 25.0
        "27,5"    -> 27.5 (decimal comma)
        "$110.00" -> 110.0
        "1,234.5" -> 1234.5
        "1.234,5" -> 1234.5 (dot thousands, decimal comma)
        None, NaN, "" -> None

    Raises:
        ValueError: If the cell holds text that is not a number
    """
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    if isinstance(value, (int, float)):
        return float(value)

    s = str(value).strip()
    if s == '':
        return None
    s = re.sub(r'[%$€\s]', '', s)
    if ',' in s and '.' in s:
        # Whichever mark comes last is the decimal mark
        if s.rfind(',') > s.rfind('.'):
            s = s.replace('.', '').replace(',', '.')
        else:
            s = s.replace(',', '')
    elif s.count(',') == 1:
        s = s.replace(',', '.')
    else:
        s = s.replace(',', '')
    return float(s)


def normalize_client_id(value) -> Optional[str]:
    """Render ids read by pandas (3, 3.0, ' 3 ') the same way."""
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return None
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    text = str(value).strip()
    return text or None


def match_client_by_name(
    name: str,
    client_names: Mapping[str, str],
    score_cutoff: int = 90,
) -> Optional[str]:
    """
    Find the id of the client whose name best matches `name`.

    Returns:
        Client id, or None when no name scores at least score_cutoff
    """
    if not name or not client_names:
        return None

    best = process.extractOne(
        name,
        client_names,
        scorer=fuzz.token_sort_ratio,
        processor=utils.default_process,
        score_cutoff=score_cutoff,
    )
    if best:
        _, _, client_id = best
        return client_id
    return None


def import_client_margins(
    frame: pd.DataFrame,
    existing_policies: Mapping[str, ClientMarginPolicy],
    client_names: Optional[Mapping[str, str]] = None,
    config: Optional[MarginConfig] = None,
) -> PolicyImportResult:
    """
    Apply imported target margins to existing client policies.

    Args:
        frame: Parsed sheet, one row per client
        existing_policies: Current policies keyed by client id
        client_names: Client names keyed by client id, for rows without an id
        config: Configuration (column aliases, fuzzy threshold)

    Returns:
        PolicyImportResult with the updated policies and per-line problems

    Raises:
        InvalidInputError: If the target margin column or both client columns are missing
    """
    config = config or get_config()
    client_names = client_names or {}
    columns = resolve_columns(frame.columns, config)

    if "target_margin_percent" not in columns:
        raise InvalidInputError("target_margin_percent", "column is missing from the sheet")
    if "client_id" not in columns and "client_name" not in columns:
        raise InvalidInputError("client_id", "sheet needs a client id or client name column")

    result = PolicyImportResult()

    for position, (_, row) in enumerate(frame.iterrows()):
        line = FIRST_DATA_LINE + position

        client_id = normalize_client_id(row[columns["client_id"]]) if "client_id" in columns else None
        client_name = row[columns["client_name"]] if "client_name" in columns else None
        if isinstance(client_name, float) and pd.isna(client_name):
            client_name = None

        if client_id is None and client_name:
            client_id = match_client_by_name(
                str(client_name), client_names, config.fuzzy_match_threshold
            )

        if client_id is None:
            if client_name:
                result.skipped.append(ImportRowError(line, f"Unknown client '{client_name}'"))
            else:
                result.errors.append(ImportRowError(line, "Missing client id and name", "client_id"))
            continue

        if client_id not in existing_policies:
            result.skipped.append(ImportRowError(line, f"Unknown client id '{client_id}'"))
            continue

        try:
            margin = parse_number(row[columns["target_margin_percent"]])
            rate = (
                parse_number(row[columns["target_hourly_rate"]])
                if "target_hourly_rate" in columns else None
            )
        except ValueError as e:
            result.errors.append(ImportRowError(line, f"Not a number: {e}"))
            continue

        if margin is None:
            result.errors.append(
                ImportRowError(line, "Target margin is required", "target_margin_percent")
            )
            continue

        base = result.policies.get(client_id, existing_policies[client_id])
        updated = replace(
            base,
            target_margin_percent=margin,
            target_hourly_rate=rate if rate is not None else base.target_hourly_rate,
        )

        try:
            updated.validate(config.days_per_year)
        except InvalidInputError as e:
            result.errors.append(ImportRowError(line, e.message, e.field))
            continue

        if client_id in result.policies:
            logger.info("Client %s appears more than once; line %d wins", client_id, line)
        result.policies[client_id] = updated

    if result.errors:
        logger.warning("Client margin import: %s", result.message)
    else:
        logger.info("Client margin import: %s", result.message)
    return result
