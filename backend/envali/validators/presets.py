"""Reference data: named regular expressions and regex options for match constraints.

Patterns are written for ``re.fullmatch`` semantics (no anchors); the
configured RegexMethod decides whether they must cover the whole value.
"""

import re
from enum import Enum


class RegexMethod(str, Enum):
    """How a pattern is applied to the field value."""

    FIND = "find"              # re.search: anywhere in the value
    LOOKING_AT = "looking_at"  # re.match: anchored at the start
    MATCHES = "matches"        # re.fullmatch: the whole value


class RegexModifier(str, Enum):
    """Regex options that can be enabled on a match constraint."""

    IGNORE_CASE = "ignore_case"
    MULTILINE = "multiline"
    DOTALL = "dotall"
    VERBOSE = "verbose"


MODIFIER_FLAGS: dict[RegexModifier, int] = {
    RegexModifier.IGNORE_CASE: re.IGNORECASE,
    RegexModifier.MULTILINE: re.MULTILINE,
    RegexModifier.DOTALL: re.DOTALL,
    RegexModifier.VERBOSE: re.VERBOSE,
}


class RegexPreset(str, Enum):
    """Named patterns usable instead of a literal expression."""

    EMAIL_ADDRESS = "email_address"
    DOMAIN_NAME = "domain_name"
    WEB_URL = "web_url"
    FTP_URL = "ftp_url"
    USER_ID = "user_id"
    PASSWORD = "password"
    DATE = "date"
    DATE_WITH_HYPHEN = "date_with_hyphen"
    DATE_WITH_SLASH = "date_with_slash"
    IP_ADDRESS = "ip_address"
    IP_ADDRESS_WITH_PORT = "ip_address_with_port"
    NUMERIC = "numeric"
    ALPHANUMERIC = "alphanumeric"
    ALPHABET = "alphabet"
    ALPHABET_UPPER_CASE = "alphabet_upper_case"
    ALPHABET_LOWER_CASE = "alphabet_lower_case"
    POST_CODE_JP = "post_code_jp"
    CELL_PHONE_JP = "cell_phone_jp"
    CELL_PHONE_WITH_HYPHEN_JP = "cell_phone_with_hyphen_jp"
    JSON_FILE = "json_file"
    TEXT_FILE = "text_file"
    XML_FILE = "xml_file"
    HIRAGANA = "hiragana"
    KATAKANA = "katakana"


# ──────────────────────────────────────────────────────────────────────
# BUILDING BLOCKS
# ──────────────────────────────────────────────────────────────────────

_OCTET = r"(?:25[0-5]|2[0-4][0-9]|1[0-9]{2}|[1-9]?[0-9])"
_IPV4 = rf"{_OCTET}(?:\.{_OCTET}){{3}}"
_PORT = r"(?:6553[0-5]|655[0-2][0-9]|65[0-4][0-9]{2}|6[0-4][0-9]{3}|[1-5][0-9]{4}|[1-9][0-9]{0,3}|0)"
_LABEL = r"[A-Za-z0-9](?:[A-Za-z0-9-]{0,61}[A-Za-z0-9])?"
_DOMAIN = rf"(?:{_LABEL}\.)+[A-Za-z]{{2,63}}"
_URL_TAIL = r"(?::[0-9]{1,5})?(?:[/?#][A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]*)?"
_MONTH = r"(?:0[1-9]|1[0-2])"
_DAY = r"(?:0[1-9]|[12][0-9]|3[01])"
_FILE_STEM = r"[^\\/:*?\"<>|\r\n]+"


# ──────────────────────────────────────────────────────────────────────
# PRESET PATTERNS
# ──────────────────────────────────────────────────────────────────────

PRESET_PATTERNS: dict[RegexPreset, str] = {
    # Internet
    RegexPreset.EMAIL_ADDRESS: rf"[A-Za-z0-9.!#$%&'*+/=?^_`{{|}}~-]+@{_DOMAIN}",
    RegexPreset.DOMAIN_NAME: _DOMAIN,
    RegexPreset.WEB_URL: rf"https?://(?:{_DOMAIN}|{_IPV4}|localhost){_URL_TAIL}",
    RegexPreset.FTP_URL: rf"ftp://(?:{_DOMAIN}|{_IPV4}|localhost){_URL_TAIL}",
    RegexPreset.IP_ADDRESS: _IPV4,
    RegexPreset.IP_ADDRESS_WITH_PORT: rf"{_IPV4}:{_PORT}",

    # Accounts
    RegexPreset.USER_ID: r"[A-Za-z0-9_\-]{3,32}",
    RegexPreset.PASSWORD: r"(?=.*[a-z])(?=.*[A-Z])(?=.*[0-9])[A-Za-z0-9!-/:-@\[-`{-~]{8,}",

    # Dates
    RegexPreset.DATE: rf"[0-9]{{4}}{_MONTH}{_DAY}",
    RegexPreset.DATE_WITH_HYPHEN: rf"[0-9]{{4}}-{_MONTH}-{_DAY}",
    RegexPreset.DATE_WITH_SLASH: rf"[0-9]{{4}}/{_MONTH}/{_DAY}",

    # Character classes
    RegexPreset.NUMERIC: r"[0-9]+",
    RegexPreset.ALPHANUMERIC: r"[A-Za-z0-9]+",
    RegexPreset.ALPHABET: r"[A-Za-z]+",
    RegexPreset.ALPHABET_UPPER_CASE: r"[A-Z]+",
    RegexPreset.ALPHABET_LOWER_CASE: r"[a-z]+",
    RegexPreset.HIRAGANA: r"[ぁ-ゟ]+",
    RegexPreset.KATAKANA: r"[ァ-ヿ]+",

    # Japanese postal / phone formats
    RegexPreset.POST_CODE_JP: r"[0-9]{3}-[0-9]{4}",
    RegexPreset.CELL_PHONE_JP: r"0[789]0[0-9]{8}",
    RegexPreset.CELL_PHONE_WITH_HYPHEN_JP: r"0[789]0-[0-9]{4}-[0-9]{4}",

    # File names
    RegexPreset.JSON_FILE: rf"{_FILE_STEM}\.json",
    RegexPreset.TEXT_FILE: rf"{_FILE_STEM}\.txt",
    RegexPreset.XML_FILE: rf"{_FILE_STEM}\.xml",
}
