"""
Centralized regex patterns for receipt line classification and filtering.
"""

import re

# --- Currency tokens ---

CURRENCY_SYMBOLS = [
    r'US\$', r'C\$', r'A\$', r'S\$', r'HK\$', r'NT\$', r'\$',
    r'€', r'£', r'¥', r'₹', r'₱', r'₩',
]

CURRENCY_CODES = [
    'USD', 'EUR', 'GBP', 'JPY', 'CAD', 'AUD', 'NZD', 'SGD', 'HKD',
    'INR', 'PHP', 'CNY', 'MXN', 'CHF',
]

CURRENCY = (
    r'(?:' + '|'.join(CURRENCY_SYMBOLS)
    + r'|(?<![A-Za-z])(?i:' + '|'.join(CURRENCY_CODES) + r')(?![A-Za-z]))'
)

# Digit groups with optional grouping separators and an optional 1-2 digit decimal part
NUMBER = r"(?:\d{1,3}(?:[.,']\d{3})+|\d+)(?:[.,]\d{1,2})?"

# A price token that ends the line: optional sign, optional currency before/after
PRICE_TAIL_RE = re.compile(
    rf"(?P<sign>-)?(?:(?P<pre>{CURRENCY})\s*)?(?P<sign2>-)?"
    rf"(?P<number>{NUMBER})(?:\s*(?P<post>{CURRENCY}))?\s*$"
)

DECIMAL_PART_RE = re.compile(r'[.,]\d{1,2}$')

TRAILING_NOISE_RE = re.compile(rf'(?:\s*(?:{CURRENCY}|[-:@.,*#=]))+$')
LEADING_NOISE_RE = re.compile(r'^[-:@.,*#=\s]+')

# --- Line templates ---

QUANTITY_PREFIX_RE = re.compile(r'^(?P<qty>\d{1,3})\s*[xX×]\s+(?P<rest>.+)$')

QUANTITY_SUFFIX_PATTERNS = [
    re.compile(r'^(?P<name>.+?)\s*\(\s*(?:[xX×]\s*)?(?P<qty>\d{1,3})\s*\)$'),
    re.compile(r'^(?P<name>.+?)\s+[xX×]\s?(?P<qty>\d{1,3})$'),
]

# --- Noise filtering ---

STOP_TOKENS = [
    'total', 'subtotal', 'tax', 'change', 'balance', 'thank you',
    'cash', 'credit', 'debit', 'tender', 'amount due',
]

# Substring match: OCR merges and inflects footer words ('GRANDTOTAL', 'TAXES', 'TOTAL$4.35')
STOP_TOKEN_RE = re.compile(
    '(?:' + '|'.join(token.replace(' ', r'\s*') for token in STOP_TOKENS) + ')',
    re.IGNORECASE,
)

# Product words that contain a stop token
STOP_TOKEN_ALLOWED_WORDS_RE = re.compile(
    r'\b(?:cashews?|taxis?|tenders|tenderloins?)\b',
    re.IGNORECASE,
)

STREET_SUFFIXES = (
    r'Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Drive|Dr|Lane|Ln|Way|'
    r'Court|Ct|Highway|Hwy|Parkway|Pkwy|Place|Pl|Plaza|Square|Sq'
)

ADDRESS_LINE_RE = re.compile(
    rf"^\d+\s+[A-Za-z0-9 .'\-]+?\s(?:{STREET_SUFFIXES})\.?"
    r"(?:\s*,.*|\s+(?:#|Suite|Ste|Unit|Apt)\.?\s*\w+)?$",
    re.IGNORECASE,
)

CITY_STATE_ZIP_RE = re.compile(r"^[A-Za-z .'\-]+,\s*[A-Z]{2}\s+\d{5}(?:-\d{4})?$")

PHONE_LINE_RE = re.compile(
    r'^(?:(?:tel|phone|ph|fax)\.?\s*[:#]?\s*)?(?:\+?1[\s.\-]?)?'
    r'\(?\d{3}\)?[\s.\-]?\d{3}[\s.\-]?\d{4}$',
    re.IGNORECASE,
)

# --- Receipt header/footer metadata ---

TOTAL_LINE_RE = re.compile(r'(?:grand\s*)?total', re.IGNORECASE)
SUBTOTAL_LINE_RE = re.compile(r'sub\s*-?\s*total', re.IGNORECASE)

TRANSACTION_ID_RE = re.compile(
    r'\b(?:transaction|trans|txn)(?:\s*(?:id|no|number|#))?\s*[:#]\s*(?P<txn>[A-Za-z0-9][A-Za-z0-9\-]{2,})',
    re.IGNORECASE,
)

# --- Structured payloads ---

KEY_VALUE_RE = re.compile(r'^\s*(?P<key>[A-Za-z][A-Za-z _\-]*?)\s*[:=]\s*(?P<value>.+?)\s*$')

PAYLOAD_FRAGMENT_SPLIT_RE = re.compile(r'[\r\n;]+')
