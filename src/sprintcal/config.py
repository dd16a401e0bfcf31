import json
import logging
import os
import re
from typing import Dict, Mapping, Optional
from urllib.parse import parse_qsl, urlencode

from .date_utils import DateLike, format_date, parse_date, to_day
from .models import CalendarConfig

DEFAULT_START_DAY = 2          # Tuesday
DEFAULT_DEVELOPMENT_DAYS = 7
DEFAULT_QA_DAYS = 7
DEFAULT_DISPLAY_MONTHS = 3
MAX_DISPLAY_MONTHS = 12

# leading integer, the rest is ignored ("7days" -> 7)
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _parse_int(raw: Optional[str], default: int, low: int, high: Optional[int], what: str) -> int:
    if not raw:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        logging.error(f"Invalid {what}: {raw!r}")
        return default
    value = int(match.group(1))
    if value < low or (high is not None and value > high):
        logging.error(f"Invalid {what}: {raw!r}")
        return default
    return value


def parse_params(params: Mapping[str, str], today: DateLike) -> CalendarConfig:
    """
    Build a CalendarConfig from query parameters:
      startDay : sprint start weekday, 0=Sunday … 6=Saturday
      dev      : development days (> 0)
      qa       : QA days (> 0)
      months   : months to display (1..12)
      center   : center date YYYY-MM-DD (default: today)
    Invalid values are logged and replaced by the default.
    """
    start_day = _parse_int(params.get('startDay'), DEFAULT_START_DAY, 0, 6, 'start day of week')
    dev_days = _parse_int(params.get('dev'), DEFAULT_DEVELOPMENT_DAYS, 1, None, 'development days')
    qa_days = _parse_int(params.get('qa'), DEFAULT_QA_DAYS, 1, None, 'QA days')
    months = _parse_int(params.get('months'), DEFAULT_DISPLAY_MONTHS, 1, MAX_DISPLAY_MONTHS, 'display months')

    center = to_day(today)
    center_raw = params.get('center')
    if center_raw:
        try:
            center = parse_date(center_raw)
        except ValueError:
            logging.error(f"Invalid center date format: {center_raw!r}")

    return CalendarConfig(
        start_day_of_week=start_day,
        development_days=dev_days,
        qa_days=qa_days,
        display_months=months,
        center_date=center,
    )


def query_params(query: str) -> Dict[str, str]:
    """Raw parameters of a query string; the last value wins for repeated keys."""
    return dict(parse_qsl(query.lstrip('?')))


def parse_query_string(query: str, today: DateLike) -> CalendarConfig:
    return parse_params(query_params(query), today)


def to_params(config: CalendarConfig) -> Dict[str, str]:
    params = {
        'startDay': str(config.start_day_of_week),
        'dev': str(config.development_days),
        'qa': str(config.qa_days),
        'months': str(config.display_months),
    }
    if config.center_date:
        params['center'] = format_date(config.center_date)
    return params


def to_query_string(config: CalendarConfig) -> str:
    return urlencode(to_params(config))


def _config_path():
    base = os.path.join(os.path.expanduser('~'), '.sprintcal')
    os.makedirs(base, exist_ok=True)
    return os.path.join(base, 'sprintcal_config.json')


def load_config() -> Dict[str, str]:
    """Stored parameters (same keys as the query string), {} if none saved."""
    path = _config_path()
    if not os.path.exists(path):
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            stored = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logging.error(f"Config could not be read from {path}: {e}")
        return {}
    if not isinstance(stored, dict):
        logging.error(f"Config in {path} is not a mapping, ignoring it")
        return {}
    return {str(k): str(v) for k, v in stored.items()}


def save_config(config: CalendarConfig, keep_center: bool = False):
    """Persist the cadence; the center date is only stored when keep_center is set."""
    params = to_params(config)
    if not keep_center:
        params.pop('center', None)
    path = _config_path()
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(params, f, ensure_ascii=False, indent=2)
    return path

