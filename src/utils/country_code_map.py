"""
Country Code Map Module - FIPS 10-4 to ISO 3166-1 alpha-2

The factbook dataset names every record with its FIPS 10-4 code, while flag
images and map services expect ISO 3166-1 alpha-2 codes. Several FIPS codes
share one ISO code (Gaza Strip and West Bank, Svalbard and Jan Mayen), so the
mapping is many-to-one.
"""

import logging
from typing import Optional, List, Dict, Set

logger = logging.getLogger(__name__)


# FIPS 10-4 (lowercase) -> ISO 3166-1 alpha-2 (lowercase).
# An empty value marks an entity without a flag of its own.
FIPS_TO_ISO: Dict[str, str] = {
    # A
    'aa': 'aw',  # Aruba
    'ac': 'ag',  # Antigua and Barbuda
    'ae': 'ae',  # United Arab Emirates
    'af': 'af',  # Afghanistan
    'ag': 'dz',  # Algeria
    'aj': 'az',  # Azerbaijan
    'al': 'al',  # Albania
    'am': 'am',  # Armenia
    'an': 'ad',  # Andorra
    'ao': 'ao',  # Angola
    'aq': 'as',  # American Samoa
    'ar': 'ar',  # Argentina
    'as': 'au',  # Australia
    'at': '',  # Ashmore and Cartier Islands
    'au': 'at',  # Austria
    'av': 'ai',  # Anguilla
    'ax': '',  # Akrotiri
    'ay': 'aq',  # Antarctica

    # B
    'ba': 'bh',  # Bahrain
    'bb': 'bb',  # Barbados
    'bc': 'bw',  # Botswana
    'bd': 'bm',  # Bermuda
    'be': 'be',  # Belgium
    'bf': 'bs',  # Bahamas
    'bg': 'bd',  # Bangladesh
    'bh': 'bz',  # Belize
    'bk': 'ba',  # Bosnia and Herzegovina
    'bl': 'bo',  # Bolivia
    'bm': 'mm',  # Burma/Myanmar
    'bn': 'bj',  # Benin
    'bo': 'by',  # Belarus
    'bp': 'sb',  # Solomon Islands
    'bq': '',  # Navassa Island
    'br': 'br',  # Brazil
    'bt': 'bt',  # Bhutan
    'bu': 'bg',  # Bulgaria
    'bv': 'bv',  # Bouvet Island (Norway)
    'bx': 'bn',  # Brunei
    'by': 'bi',  # Burundi

    # C
    'ca': 'ca',  # Canada
    'cb': 'kh',  # Cambodia
    'cd': 'td',  # Chad
    'ce': 'lk',  # Sri Lanka
    'cf': 'cg',  # Congo (Brazzaville)
    'cg': 'cd',  # Congo (Kinshasa)
    'ch': 'cn',  # China
    'ci': 'cl',  # Chile
    'cj': 'ky',  # Cayman Islands
    'ck': 'cc',  # Cocos (Keeling) Islands
    'cm': 'cm',  # Cameroon
    'cn': 'km',  # Comoros
    'co': 'co',  # Colombia
    'cq': 'mp',  # Northern Mariana Islands
    'cr': '',  # Coral Sea Islands
    'cs': 'cr',  # Costa Rica
    'ct': 'cf',  # Central African Republic
    'cu': 'cu',  # Cuba
    'cv': 'cv',  # Cabo Verde
    'cw': 'ck',  # Cook Islands
    'cy': 'cy',  # Cyprus

    # D
    'da': 'dk',  # Denmark
    'dj': 'dj',  # Djibouti
    'do': 'dm',  # Dominica
    'dr': 'do',  # Dominican Republic
    'dx': '',  # Dhekelia

    # E
    'ec': 'ec',  # Ecuador
    'ee': 'eu',  # European Union
    'eg': 'eg',  # Egypt
    'ei': 'ie',  # Ireland
    'ek': 'gq',  # Equatorial Guinea
    'en': 'ee',  # Estonia
    'er': 'er',  # Eritrea
    'es': 'sv',  # El Salvador
    'et': 'et',  # Ethiopia
    'ez': 'cz',  # Czech Republic

    # F
    'fi': 'fi',  # Finland
    'fj': 'fj',  # Fiji
    'fk': 'fk',  # Falkland Islands
    'fm': 'fm',  # Micronesia
    'fo': 'fo',  # Faroe Islands
    'fp': 'pf',  # French Polynesia
    'fr': 'fr',  # France
    'fs': 'tf',  # French Southern Territories

    # G
    'ga': 'gm',  # Gambia
    'gb': 'ga',  # Gabon
    'gg': 'ge',  # Georgia
    'gh': 'gh',  # Ghana
    'gi': 'gi',  # Gibraltar
    'gj': 'gd',  # Grenada
    'gk': 'gg',  # Guernsey
    'gl': 'gl',  # Greenland
    'gm': 'de',  # Germany
    'gq': 'gu',  # Guam
    'gr': 'gr',  # Greece
    'gt': 'gt',  # Guatemala
    'gv': 'gn',  # Guinea
    'gy': 'gy',  # Guyana
    'gz': 'ps',  # Gaza Strip (Palestine)

    # H
    'ha': 'ht',  # Haiti
    'hk': 'hk',  # Hong Kong
    'hm': 'hm',  # Heard Island and McDonald Islands
    'ho': 'hn',  # Honduras
    'hr': 'hr',  # Croatia
    'hu': 'hu',  # Hungary

    # I
    'ic': 'is',  # Iceland
    'id': 'id',  # Indonesia
    'im': 'im',  # Isle of Man
    'in': 'in',  # India
    'io': 'io',  # British Indian Ocean Territory
    'ip': '',  # Clipperton Island (France)
    'ir': 'ir',  # Iran
    'is': 'il',  # Israel
    'it': 'it',  # Italy
    'iv': 'ci',  # Cote d'Ivoire
    'iz': 'iq',  # Iraq

    # J
    'ja': 'jp',  # Japan
    'je': 'je',  # Jersey
    'jm': 'jm',  # Jamaica
    'jn': 'sj',  # Jan Mayen (Norway)
    'jo': 'jo',  # Jordan

    # K
    'ke': 'ke',  # Kenya
    'kg': 'kg',  # Kyrgyzstan
    'kn': 'kp',  # North Korea
    'kr': 'ki',  # Kiribati
    'ks': 'kr',  # South Korea
    'kt': 'cx',  # Christmas Island
    'ku': 'kw',  # Kuwait
    'kv': 'xk',  # Kosovo
    'kz': 'kz',  # Kazakhstan

    # L
    'la': 'la',  # Laos
    'le': 'lb',  # Lebanon
    'lg': 'lv',  # Latvia
    'lh': 'lt',  # Lithuania
    'li': 'lr',  # Liberia
    'lo': 'sk',  # Slovakia
    'ls': 'li',  # Liechtenstein
    'lt': 'ls',  # Lesotho
    'lu': 'lu',  # Luxembourg
    'ly': 'ly',  # Libya

    # M
    'ma': 'mg',  # Madagascar
    'mc': 'mo',  # Macau
    'md': 'md',  # Moldova
    'mg': 'mn',  # Mongolia
    'mh': 'ms',  # Montserrat
    'mi': 'mw',  # Malawi
    'mj': 'me',  # Montenegro
    'mk': 'mk',  # North Macedonia
    'ml': 'ml',  # Mali
    'mn': 'mc',  # Monaco
    'mo': 'ma',  # Morocco
    'mp': 'mu',  # Mauritius
    'mr': 'mr',  # Mauritania
    'mt': 'mt',  # Malta
    'mu': 'om',  # Oman
    'mv': 'mv',  # Maldives
    'mx': 'mx',  # Mexico
    'my': 'my',  # Malaysia
    'mz': 'mz',  # Mozambique

    # N
    'nc': 'nc',  # New Caledonia
    'ne': 'nu',  # Niue
    'nf': 'nf',  # Norfolk Island
    'ng': 'ne',  # Niger
    'nh': 'vu',  # Vanuatu
    'ni': 'ng',  # Nigeria
    'nl': 'nl',  # Netherlands
    'nn': 'sx',  # Sint Maarten
    'no': 'no',  # Norway
    'np': 'np',  # Nepal
    'nr': 'nr',  # Nauru
    'ns': 'sr',  # Suriname
    'nu': 'ni',  # Nicaragua
    'nz': 'nz',  # New Zealand

    # O
    'od': 'ss',  # South Sudan
    'oo': '',  # Southern Ocean

    # P
    'pa': 'py',  # Paraguay
    'pc': 'pn',  # Pitcairn Islands
    'pe': 'pe',  # Peru
    'pf': '',  # Paracel Islands (disputed)
    'pg': '',  # Spratly Islands
    'pk': 'pk',  # Pakistan
    'pl': 'pl',  # Poland
    'pm': 'pa',  # Panama
    'po': 'pt',  # Portugal
    'pp': 'pg',  # Papua New Guinea
    'ps': 'pw',  # Palau
    'pu': 'gw',  # Guinea-Bissau

    # Q
    'qa': 'qa',  # Qatar

    # R
    'ri': 'rs',  # Serbia
    'rm': 'mh',  # Marshall Islands
    'rn': 'mf',  # Saint Martin
    'ro': 'ro',  # Romania
    'rp': 'ph',  # Philippines
    'rq': 'pr',  # Puerto Rico
    'rs': 'ru',  # Russia
    'rw': 'rw',  # Rwanda

    # S
    'sa': 'sa',  # Saudi Arabia
    'sb': 'pm',  # Saint Pierre and Miquelon
    'sc': 'kn',  # Saint Kitts and Nevis
    'se': 'sc',  # Seychelles
    'sf': 'za',  # South Africa
    'sg': 'sn',  # Senegal
    'sh': 'sh',  # Saint Helena
    'si': 'si',  # Slovenia
    'sl': 'sl',  # Sierra Leone
    'sm': 'sm',  # San Marino
    'sn': 'sg',  # Singapore
    'so': 'so',  # Somalia
    'sp': 'es',  # Spain
    'st': 'lc',  # Saint Lucia
    'su': 'sd',  # Sudan
    'sv': 'sj',  # Svalbard
    'sw': 'se',  # Sweden
    'sx': 'gs',  # South Georgia and South Sandwich Islands
    'sy': 'sy',  # Syria
    'sz': 'ch',  # Switzerland

    # T
    'tb': 'bl',  # Saint Barthelemy
    'td': 'tt',  # Trinidad and Tobago
    'th': 'th',  # Thailand
    'ti': 'tj',  # Tajikistan
    'tk': 'tc',  # Turks and Caicos Islands
    'tl': 'tk',  # Tokelau
    'tn': 'to',  # Tonga
    'to': 'tg',  # Togo
    'tp': 'st',  # Sao Tome and Principe
    'ts': 'tn',  # Tunisia
    'tt': 'tl',  # Timor-Leste
    'tu': 'tr',  # Turkey
    'tv': 'tv',  # Tuvalu
    'tw': 'tw',  # Taiwan
    'tx': 'tm',  # Turkmenistan
    'tz': 'tz',  # Tanzania

    # U
    'uc': 'cw',  # Curacao
    'ug': 'ug',  # Uganda
    'uk': 'gb',  # United Kingdom
    'um': 'um',  # US Pacific Island Wildlife Refuges
    'up': 'ua',  # Ukraine
    'us': 'us',  # United States
    'uv': 'bf',  # Burkina Faso
    'uy': 'uy',  # Uruguay
    'uz': 'uz',  # Uzbekistan

    # V
    'vc': 'vc',  # Saint Vincent and the Grenadines
    've': 've',  # Venezuela
    'vi': 'vg',  # British Virgin Islands
    'vm': 'vn',  # Vietnam
    'vq': 'vi',  # US Virgin Islands
    'vt': 'va',  # Vatican City

    # W
    'wa': 'na',  # Namibia
    'we': 'ps',  # West Bank (Palestine)
    'wf': 'wf',  # Wallis and Futuna
    'wi': 'eh',  # Western Sahara
    'wq': '',  # Wake Island (US)
    'ws': 'ws',  # Samoa
    'wz': 'sz',  # Eswatini (Swaziland)

    # X
    'xo': '',  # Indian Ocean
    'xq': '',  # Arctic Ocean
    'xx': '',  # World

    # Y
    'ym': 'ye',  # Yemen

    # Z
    'za': 'zm',  # Zambia
    'zh': '',  # Atlantic Ocean
    'zi': 'zw',  # Zimbabwe
    'zn': '',  # Pacific Ocean
}


class CountryCodeMapper:
    """
    Maps factbook (FIPS) country codes to ISO codes for flag lookups.
    Lookups are case-insensitive and never raise.
    """

    def __init__(self, table: Optional[Dict[str, str]] = None):
        """Initialize the mapper, optionally with a custom table."""
        self._build_mappings(table if table is not None else FIPS_TO_ISO)

    def _build_mappings(self, table: Dict[str, str]):
        """Build internal lookup dictionaries."""
        self._fips_to_iso: Dict[str, str] = {
            fips.lower(): iso.lower() for fips, iso in table.items()
        }

        # Known entities that have no flag (oceans, disputed territories)
        self._flagless: Set[str] = {
            fips for fips, iso in self._fips_to_iso.items() if not iso
        }

        # Reverse lookup (ISO -> all FIPS codes sharing it)
        self._iso_to_fips: Dict[str, List[str]] = {}
        for fips, iso in sorted(self._fips_to_iso.items()):
            if iso:
                self._iso_to_fips.setdefault(iso, []).append(fips)

    def get_iso_code(self, fips_code: str) -> str:
        """
        Get the ISO code used for the flag of a factbook record.

        Args:
            fips_code: FIPS 10-4 code, any case

        Returns:
            The mapped ISO code, "" for entities without a flag, or the
            lowercased input when the code is not in the table
        """
        if not fips_code:
            return ""

        cleaned = fips_code.lower()
        if cleaned in self._fips_to_iso:
            return self._fips_to_iso[cleaned]

        logger.debug(f"No ISO mapping for code '{cleaned}', using it as-is")
        return cleaned

    def is_known(self, fips_code: str) -> bool:
        """Check if a code is present in the mapping table."""
        return fips_code.lower() in self._fips_to_iso if fips_code else False

    def has_flag(self, fips_code: str) -> bool:
        """Check if a code resolves to a non-empty flag code."""
        return bool(self.get_iso_code(fips_code))

    def codes_without_flag(self) -> List[str]:
        """Get the sorted FIPS codes of known entities without a flag."""
        return sorted(self._flagless)

    def get_fips_codes(self, iso_code: str) -> List[str]:
        """Get every FIPS code that maps onto an ISO code."""
        return list(self._iso_to_fips.get(iso_code.lower(), [])) if iso_code else []


# Global instance for convenience
_mapper = None

def get_mapper() -> CountryCodeMapper:
    """Get or create global CountryCodeMapper instance."""
    global _mapper
    if _mapper is None:
        _mapper = CountryCodeMapper()
    return _mapper


def lookup_flag_code(raw_code: str) -> str:
    """Convenience function to get the flag (ISO) code for a FIPS code."""
    return get_mapper().get_iso_code(raw_code)
