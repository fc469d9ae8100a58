#!/usr/bin/env python3
"""
configuration.py
-------------------
Tracker configuration and plugin-wide settings.

A tracker is configured by a small block of user-authored YAML (JSON is
accepted too, being valid YAML). The block is parsed once into an
immutable ``TrackerConfiguration``. Controls never mutate it; they
produce a new value (``shift_focal_date``, ``with_days``, ``toggle_sort``)
and the caller re-derives the grid from it.

Malformed options never produce a partially-merged configuration: the
whole block is replaced by defaults and a single notice is returned.

Usage:
    from focustrack.dataclasses.configuration import load_configuration

    config, notices = load_configuration(block_text, today=date.today())
    later = config.shift_focal_date(-7)
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import dataclass, field, replace
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Tuple

# --- Third party imports ---
import yaml

# --- Local imports ---
from focustrack.core import constants
from focustrack.core.exceptions import ConfigurationError, ValidationError
from focustrack.core.logging_manager import FocusTrackLogger, safe_logger
from focustrack.core.validators import DataValidator
from focustrack.dataclasses.tracked_item import FilterSpec
from focustrack.utils.parsers import option_key

logger = logging.getLogger(__name__)

Columns = Tuple[Tuple[str, str], ...]


# ----- Settings -----


@dataclass(frozen=True)
class TrackerSettings:
    """
    Plugin-wide defaults applied to every tracker.

    Attributes:
        default_rating_map: Rating table used when a tracker names none (or an unknown one)
        default_flag_map: Flag table used when a tracker names none (or an unknown one)
        default_days_past: Past days shown when a tracker does not say
        default_days_future: Future days shown when a tracker does not say
        min_days_past: Floor for any past-day count
        min_days_future: Floor for any future-day count
    """

    default_rating_map: str = constants.DEFAULT_RATING_MAP
    default_flag_map: str = constants.DEFAULT_FLAG_MAP
    default_days_past: int = constants.DEFAULT_DAYS_PAST
    default_days_future: int = constants.DEFAULT_DAYS_FUTURE
    min_days_past: int = constants.MIN_DAYS_PAST
    min_days_future: int = constants.MIN_DAYS_FUTURE

    def __post_init__(self) -> None:
        if self.default_rating_map not in constants.RATING_MAPS:
            raise ConfigurationError(f"Unknown rating map: {self.default_rating_map}")
        if self.default_flag_map not in constants.FLAG_MAPS:
            raise ConfigurationError(f"Unknown flag map: {self.default_flag_map}")
        if self.min_days_past < 0 or self.min_days_future < 0:
            raise ConfigurationError("Minimum day counts must be non-negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TrackerSettings:
        """
        Build settings from a mapping of (any-case) option names.

        Raises:
            ConfigurationError: On wrong types or unknown map names
        """
        known = {f for f in cls.__dataclass_fields__}
        values: Dict[str, Any] = {}
        for raw_key, value in data.items():
            key = option_key(str(raw_key))
            if key not in known or value is None:
                continue
            if key.startswith(("default_days", "min_days")):
                try:
                    value = DataValidator.normalize_int(value)
                except ValidationError as e:
                    raise ConfigurationError(f"{raw_key}: {e}") from e
            elif not isinstance(value, str):
                raise ConfigurationError(f"{raw_key} must be a map name")
            values[key] = value
        return cls(**values)

    @classmethod
    def from_file(
        cls, path: Path, logger: Optional[FocusTrackLogger] = None
    ) -> TrackerSettings:
        """
        Load settings from a YAML file, falling back to defaults.

        A missing file is silent; a malformed one is logged.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
            if not isinstance(data, dict):
                raise ConfigurationError("Settings file must contain a mapping")
            return cls.from_mapping(data)
        except (yaml.YAMLError, ConfigurationError) as e:
            safe_logger(logger).log_warning(
                "Invalid settings file, using defaults",
                {"path": str(path), "error": str(e)},
            )
            return cls()


# ----- Tracker configuration -----


@dataclass(frozen=True)
class TrackerConfiguration:
    """
    Immutable options of one tracker.

    Attributes:
        paths: Path patterns selecting notes
        properties: Frontmatter equality filter
        tags: Tag-any patterns
        tag_set: Tag-all patterns
        exclude_tags: Exclude-any patterns
        exclude_tag_set: Exclude-all patterns
        log_property_name: Frontmatter field holding the focus log
        rating_map: Name of the rating table in use
        flag_map: Name of the flag table in use
        rating_symbols: Rating symbols, level 1 first
        flag_symbols: Flag symbols, level 1 first
        flag_keys: Flag descriptions aligned with flag_symbols
        title_property_names: Frontmatter fields tried (in order) for the row label
        days_in_past: Days shown before the focal date
        days_in_future: Days shown after the focal date
        focal_date: Date the window is centered on
        prefix_columns: (heading, property) columns before the track column
        postfix_columns: (heading, property) columns after the date cells
        sort_column: "track", a property name, or "" for the default
        sort_descending: Sort direction
        min_days_past: Floor applied by with_days
        min_days_future: Floor applied by with_days
    """

    focal_date: date
    paths: Tuple[str, ...] = ()
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)
    tags: Tuple[str, ...] = ()
    tag_set: Tuple[str, ...] = ()
    exclude_tags: Tuple[str, ...] = ()
    exclude_tag_set: Tuple[str, ...] = ()
    log_property_name: str = constants.DEFAULT_LOG_PROPERTY
    rating_map: str = constants.DEFAULT_RATING_MAP
    flag_map: str = constants.DEFAULT_FLAG_MAP
    rating_symbols: Tuple[str, ...] = constants.RATING_MAPS[constants.DEFAULT_RATING_MAP].symbols
    flag_symbols: Tuple[str, ...] = constants.FLAG_MAPS[constants.DEFAULT_FLAG_MAP].symbols
    flag_keys: Tuple[str, ...] = constants.FLAG_MAPS[constants.DEFAULT_FLAG_MAP].keys
    title_property_names: Tuple[str, ...] = constants.DEFAULT_TITLE_PROPERTIES
    days_in_past: int = constants.DEFAULT_DAYS_PAST
    days_in_future: int = constants.DEFAULT_DAYS_FUTURE
    prefix_columns: Columns = ()
    postfix_columns: Columns = ()
    sort_column: str = ""
    sort_descending: bool = False
    min_days_past: int = constants.MIN_DAYS_PAST
    min_days_future: int = constants.MIN_DAYS_FUTURE

    # ----- Construction -----

    @classmethod
    def defaults(
        cls, today: date, settings: Optional[TrackerSettings] = None
    ) -> TrackerConfiguration:
        """All-defaults configuration focused on today."""
        settings = settings or TrackerSettings()
        rating = constants.RATING_MAPS[settings.default_rating_map]
        flags = constants.FLAG_MAPS[settings.default_flag_map]
        return cls(
            focal_date=today,
            rating_map=settings.default_rating_map,
            flag_map=settings.default_flag_map,
            rating_symbols=rating.symbols,
            flag_symbols=flags.symbols,
            flag_keys=flags.keys,
            days_in_past=_clamp_days(settings.default_days_past, settings.min_days_past),
            days_in_future=_clamp_days(settings.default_days_future, settings.min_days_future),
            min_days_past=settings.min_days_past,
            min_days_future=settings.min_days_future,
        )

    @classmethod
    def from_options(
        cls,
        options: Mapping[str, Any],
        today: date,
        settings: Optional[TrackerSettings] = None,
    ) -> Tuple[TrackerConfiguration, List[str]]:
        """
        Build a configuration from parsed options.

        Unknown option names are ignored; unknown map names fall back to the
        settings' default tables with a notice.

        Returns:
            Tuple of (configuration, notices)

        Raises:
            ConfigurationError: If any recognized option has an unusable value
        """
        settings = settings or TrackerSettings()
        base = cls.defaults(today, settings)
        notices: List[str] = []
        opts = {option_key(str(k)): v for k, v in options.items()}
        changes: Dict[str, Any] = {}

        try:
            paths = DataValidator.normalize_string_list(opts.get("paths"), "paths")
            paths += DataValidator.normalize_string_list(opts.get("path"), "path")
            changes["paths"] = tuple(paths)
            for key in ("tags", "tag_set", "exclude_tags", "exclude_tag_set"):
                changes[key] = tuple(DataValidator.normalize_string_list(opts.get(key), key))
            if "title_property_names" in opts:
                changes["title_property_names"] = tuple(
                    DataValidator.normalize_string_list(
                        opts["title_property_names"], "titlePropertyNames"
                    )
                )

            properties = opts.get("properties") or {}
            if not isinstance(properties, dict):
                raise ConfigurationError("properties must be a mapping")
            changes["properties"] = dict(properties)

            if opts.get("log_property_name") is not None:
                name = opts["log_property_name"]
                if not isinstance(name, str) or not name.strip():
                    raise ConfigurationError("logPropertyName must be a non-empty string")
                changes["log_property_name"] = name.strip()

            days_past = DataValidator.normalize_int(opts.get("days_in_past"))
            days_future = DataValidator.normalize_int(opts.get("days_in_future"))
            if days_past is not None:
                changes["days_in_past"] = _clamp_days(days_past, settings.min_days_past)
            if days_future is not None:
                changes["days_in_future"] = _clamp_days(days_future, settings.min_days_future)

            focal = opts.get("focal_date", opts.get("last_displayed_date"))
            focal_date = DataValidator.normalize_date(focal)
            if focal_date is not None:
                changes["focal_date"] = focal_date

            changes["prefix_columns"] = _parse_columns(opts.get("prefix_columns"), "prefixColumns")
            changes["postfix_columns"] = _parse_columns(opts.get("postfix_columns"), "postfixColumns")

            sort_column = opts.get("sort_column")
            if sort_column is not None:
                if not isinstance(sort_column, str):
                    raise ConfigurationError("sortColumn must be a string")
                changes["sort_column"] = sort_column
            descending = DataValidator.normalize_bool(opts.get("sort_descending"))
            if descending is not None:
                changes["sort_descending"] = descending

            changes.update(_resolve_tables(opts, settings, notices))
        except ValidationError as e:
            raise ConfigurationError(str(e)) from e

        return replace(base, **changes), notices

    # ----- Derived values -----

    @property
    def filter_spec(self) -> FilterSpec:
        return FilterSpec.from_options(
            paths=self.paths,
            tags=self.tags,
            tag_set=self.tag_set,
            exclude_tags=self.exclude_tags,
            exclude_tag_set=self.exclude_tag_set,
            properties=dict(self.properties),
        )

    @property
    def effective_sort_column(self) -> str:
        """Sort column in force: explicit, else the first prefix column's property, else track."""
        if self.sort_column:
            return self.sort_column
        if self.prefix_columns:
            return self.prefix_columns[0][1]
        return constants.TRACK_COLUMN

    @property
    def columns(self) -> Columns:
        return self.prefix_columns + self.postfix_columns

    def column_definition(self, name: str) -> Optional[str]:
        """Definition of a column addressed by its heading or its property."""
        for heading, definition in self.columns:
            if name in (heading, definition):
                return definition
        return None

    # ----- Control actions (return new values) -----

    def with_focal_date(self, focal_date: date) -> TrackerConfiguration:
        return replace(self, focal_date=focal_date)

    def shift_focal_date(self, days: int) -> TrackerConfiguration:
        """Move the focal date, stopping at the ends of the calendar."""
        try:
            focal = self.focal_date + timedelta(days=days)
        except OverflowError:
            focal = date.max if days > 0 else date.min
        return replace(self, focal_date=focal)

    def with_days(
        self, past: Optional[int] = None, future: Optional[int] = None
    ) -> TrackerConfiguration:
        """Change the window size, flooring each count to its minimum and capping it."""
        return replace(
            self,
            days_in_past=_clamp_days(
                self.days_in_past if past is None else past, self.min_days_past
            ),
            days_in_future=_clamp_days(
                self.days_in_future if future is None else future, self.min_days_future
            ),
        )

    def toggle_sort(self, column: str) -> TrackerConfiguration:
        """Same column flips direction; a new column sorts ascending."""
        if column == self.effective_sort_column:
            return replace(self, sort_column=column, sort_descending=not self.sort_descending)
        return replace(self, sort_column=column, sort_descending=False)


def _clamp_days(value: int, minimum: int) -> int:
    return min(constants.MAX_DAYS, max(minimum, value))


def _parse_columns(value: Any, name: str) -> Columns:
    if value is None:
        return ()
    if not isinstance(value, dict):
        raise ConfigurationError(f"{name} must be a mapping of heading to property")
    columns = []
    for heading, definition in value.items():
        if not isinstance(definition, str):
            raise ConfigurationError(f"{name}: column '{heading}' must name a property")
        columns.append((str(heading), definition))
    return tuple(columns)


def _resolve_tables(
    opts: Mapping[str, Any], settings: TrackerSettings, notices: List[str]
) -> Dict[str, Any]:
    """Pick symbol tables by name, then apply any explicit symbol overrides."""
    changes: Dict[str, Any] = {}

    for key in ("rating_map", "flag_map"):
        if opts.get(key) is not None and not isinstance(opts[key], str):
            raise ConfigurationError(f"{key} must be a map name")

    rating_name = opts.get("rating_map") or settings.default_rating_map
    if rating_name not in constants.RATING_MAPS:
        notices.append(
            f"Unknown rating map '{rating_name}', using '{settings.default_rating_map}'"
        )
        logger.warning("Unknown rating map %r", rating_name)
        rating_name = settings.default_rating_map
    changes["rating_map"] = rating_name
    changes["rating_symbols"] = constants.RATING_MAPS[rating_name].symbols

    flag_name = opts.get("flag_map") or settings.default_flag_map
    if flag_name not in constants.FLAG_MAPS:
        notices.append(f"Unknown flag map '{flag_name}', using '{settings.default_flag_map}'")
        logger.warning("Unknown flag map %r", flag_name)
        flag_name = settings.default_flag_map
    changes["flag_map"] = flag_name
    changes["flag_symbols"] = constants.FLAG_MAPS[flag_name].symbols
    changes["flag_keys"] = constants.FLAG_MAPS[flag_name].keys

    for key in ("rating_symbols", "flag_symbols", "flag_keys"):
        if key in opts:
            changes[key] = tuple(DataValidator.normalize_string_list(opts[key], key))
    return changes


def load_configuration(
    text: str,
    today: date,
    settings: Optional[TrackerSettings] = None,
    logger: Optional[FocusTrackLogger] = None,
) -> Tuple[TrackerConfiguration, List[str]]:
    """
    Parse a tracker's options block.

    Any error falls back to the all-defaults configuration (no partial
    merge) with exactly one notice describing it.

    Args:
        text: YAML or JSON options (may be empty)
        today: Current date, used as the default focal date
        settings: Plugin-wide settings (defaults when None)
        logger: Optional logger for the fallback warning

    Returns:
        Tuple of (configuration, notices)
    """
    settings = settings or TrackerSettings()
    try:
        options = yaml.safe_load(text) if text and text.strip() else {}
        if options is None:
            options = {}
        if not isinstance(options, dict):
            raise ConfigurationError(
                f"Options must be a mapping, got {type(options).__name__}"
            )
        return TrackerConfiguration.from_options(options, today, settings)
    except (yaml.YAMLError, ConfigurationError) as e:
        safe_logger(logger).log_warning(
            "Invalid tracker options, continuing with defaults", {"error": str(e)}
        )
        notice = f"{constants.PLUGIN_NAME}: received invalid settings. continuing with default settings ({e})"
        return TrackerConfiguration.defaults(today, settings), [notice]


def validate_symbol_tables(configuration: TrackerConfiguration) -> List[str]:
    """
    Warn about symbol tables that will render out-of-bounds markers.

    Returns:
        Warning messages (empty when the tables look usable)
    """
    warnings = []
    if not configuration.rating_symbols:
        warnings.append("Rating symbol table is empty; every rating renders as a marker")
    if not configuration.flag_symbols:
        warnings.append("Flag symbol table is empty; every flag renders as a marker")
    if len(configuration.flag_keys) < len(configuration.flag_symbols):
        warnings.append(
            f"Only {len(configuration.flag_keys)} flag keys for "
            f"{len(configuration.flag_symbols)} flag symbols"
        )
    return warnings
