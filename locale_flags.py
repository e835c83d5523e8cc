"""
Flag emoji for locale column headers
"""

# Language codes whose country code differs from the language code
LANGUAGE_TO_COUNTRY = {
    'EN': 'GB', 'JA': 'JP', 'KO': 'KR', 'ZH': 'CN', 'HI': 'IN',
    'UR': 'PK', 'AR': 'SA', 'FA': 'IR', 'HE': 'IL', 'UK': 'UA',
    'EL': 'GR', 'CS': 'CZ', 'DA': 'DK', 'SV': 'SE', 'NB': 'NO',
    'NN': 'NO', 'ET': 'EE', 'SL': 'SI', 'VI': 'VN', 'MS': 'MY',
    'TL': 'PH', 'SW': 'KE', 'KA': 'GE', 'HY': 'AM', 'SQ': 'AL',
    'BS': 'BA', 'SR': 'RS', 'MK': 'MK', 'GA': 'IE', 'CY': 'GB',
    'EU': 'ES', 'GL': 'ES', 'CA': 'ES', 'BN': 'BD', 'TA': 'IN',
    'TE': 'IN', 'ML': 'IN', 'KN': 'IN', 'MR': 'IN', 'GU': 'IN',
    'PA': 'IN', 'SI': 'LK', 'NE': 'NP', 'MY': 'MM', 'KM': 'KH',
    'LO': 'LA',
}

REGIONAL_INDICATOR_A = 0x1F1E6


def _is_country_code(code):
    return len(code) == 2 and all('A' <= c <= 'Z' for c in code)


def locale_to_flag(locale):
    """Return a flag emoji for locale ('en' -> GB, 'pt_BR' -> BR) or None"""
    parts = locale.upper().split('_')
    if len(parts) > 1:
        country = parts[-1] if len(parts[-1]) == 2 else parts[0]
    else:
        country = LANGUAGE_TO_COUNTRY.get(parts[0], parts[0])

    if not _is_country_code(country):
        return None
    return ''.join(chr(REGIONAL_INDICATOR_A + ord(c) - ord('A')) for c in country)
