"""
Repository for the static grid operator (DSO) table.

Network tariffs are yearly weighted averages from DatahubPricelist (2025)
and serve as the fallback when a live lookup fails.
"""

import pandas as pd
from typing import Optional, Any, Dict, List

from .base_repository import BaseRepository


GRID_PROVIDERS: List[Dict[str, Any]] = [
    {"code": "791", "name": "Radius Elnet A/S", "gln": "5790000705689",
     "network_tariff": 0.217, "charge_code": "DT_C_01", "region": "DK2",
     "municipalities": ["København", "Frederiksberg", "Gentofte", "Lyngby-Taarbæk", "Gladsaxe",
                        "Herlev", "Ballerup", "Furesø", "Allerød", "Fredensborg", "Helsingør",
                        "Hørsholm", "Rudersdal", "Egedal", "Frederikssund", "Halsnæs", "Gribskov",
                        "Hillerød", "Holbæk", "Lejre", "Køge", "Greve", "Høje-Taastrup", "Vallensbæk"]},
    {"code": "740", "name": "Cerius A/S", "gln": "5790000610976",
     "network_tariff": 0.236, "charge_code": "DT_C_01", "region": "DK2",
     "municipalities": ["Faxe", "Stevns", "Køge", "Solrød", "Greve", "Holbæk", "Kalundborg",
                        "Odsherred", "Slagelse", "Ringsted", "Næstved", "Vordingborg",
                        "Guldborgsund", "Lolland"]},
    {"code": "853", "name": "Cerius A/S", "gln": "5790000610976",
     "network_tariff": 0.236, "charge_code": "DT_C_01", "region": "DK2", "municipalities": []},
    {"code": "131", "name": "N1 A/S", "gln": "5790001089030",
     "network_tariff": 0.192, "charge_code": "CD", "region": "DK1",
     "municipalities": ["Aabenraa", "Tønder", "Haderslev", "Sønderborg", "Esbjerg", "Fanø",
                        "Varde", "Billund", "Vejen", "Kolding", "Vejle", "Hedensted", "Horsens",
                        "Viborg", "Skive", "Holstebro", "Herning", "Ikast-Brande",
                        "Ringkøbing-Skjern", "Lemvig", "Struer", "Thisted", "Morsø",
                        "Vesthimmerland", "Rebild", "Mariagerfjord", "Jammerbugt", "Aalborg",
                        "Brønderslev", "Frederikshavn", "Hjørring", "Læsø", "Ærø"]},
    {"code": "344", "name": "N1 A/S", "gln": "5790001089030",
     "network_tariff": 0.192, "charge_code": "CD", "region": "DK1", "municipalities": []},
    {"code": "398", "name": "N1 A/S", "gln": "5790001089030",
     "network_tariff": 0.192, "charge_code": "CD", "region": "DK1", "municipalities": []},
    {"code": "543", "name": "Vores Elnet A/S", "gln": "5790000610853",
     "network_tariff": 0.220, "charge_code": "DT_C_01", "region": "DK2",
     "municipalities": ["Odense", "Faaborg-Midtfyn", "Assens", "Middelfart", "Nordfyn",
                        "Kerteminde", "Nyborg", "Svendborg", "Langeland", "Ærø"]},
    {"code": "244", "name": "TREFOR El-Net A/S", "gln": "5790000392261",
     "network_tariff": 0.316, "charge_code": "DT_C_01", "region": "DK1",
     "municipalities": ["Fredericia", "Kolding", "Vejen", "Haderslev", "Middelfart"]},
    {"code": "911", "name": "TREFOR El-Net Øst A/S", "gln": "5790000392551",
     "network_tariff": 0.641, "charge_code": "DT_C_01", "region": "DK2",
     "municipalities": ["Bornholm", "Egedal"]},
    {"code": "151", "name": "Konstant Net A/S", "gln": "5790000610280",
     "network_tariff": 0.310, "charge_code": "DT_C_01", "region": "DK1",
     "municipalities": ["Aarhus", "Skanderborg", "Favrskov", "Norddjurs", "Syddjurs", "Samsø"]},
    {"code": "245", "name": "Konstant Net A/S", "gln": "5790000610280",
     "network_tariff": 0.31, "charge_code": None, "region": "DK1",
     "municipalities": ["Horsens", "Hedensted"]},
    {"code": "031", "name": "Nord Energi Net A/S", "gln": "5790001095024",
     "network_tariff": 0.30, "charge_code": None, "region": "DK1",
     "municipalities": ["Frederikshavn", "Hjørring", "Brønderslev", "Aalborg", "Jammerbugt"]},
    {"code": "233", "name": "Dinel A/S", "gln": "5790000610846",
     "network_tariff": 0.29, "charge_code": None, "region": "DK1",
     "municipalities": ["Aarhus", "Favrskov", "Horsens", "Odder", "Skanderborg"]},
    {"code": "533", "name": "FLOW Elnet A/S", "gln": "5790000610839",
     "network_tariff": 0.28, "charge_code": None, "region": "DK2",
     "municipalities": ["Faaborg-Midtfyn", "Svendborg"]},
    {"code": "531", "name": "Ravdex A/S", "gln": "5790001089375",
     "network_tariff": 0.29, "charge_code": None, "region": "DK2",
     "municipalities": ["Odense", "Kerteminde"]},
    {"code": "051", "name": "Elinord A/S", "gln": "5790001089191",
     "network_tariff": 0.30, "charge_code": None, "region": "DK1",
     "municipalities": ["Frederikshavn"]},
    {"code": "154", "name": "Elnet Midt A/S", "gln": "5790001089238",
     "network_tariff": 0.30, "charge_code": None, "region": "DK1",
     "municipalities": ["Silkeborg"]},
    {"code": "381", "name": "Hurup Elværk Net A/S", "gln": "5790001089542",
     "network_tariff": 0.32, "charge_code": None, "region": "DK1",
     "municipalities": ["Thisted"]},
    {"code": "347", "name": "NOE Net A/S", "gln": "5790001089351",
     "network_tariff": 0.31, "charge_code": None, "region": "DK1",
     "municipalities": ["Holstebro", "Lemvig", "Herning"]},
    {"code": "348", "name": "RAH Net A/S", "gln": "5790001089368",
     "network_tariff": 0.31, "charge_code": None, "region": "DK1",
     "municipalities": ["Ringkøbing-Skjern", "Herning", "Ikast-Brande", "Billund", "Vejle"]},
    {"code": "351", "name": "L-Net A/S", "gln": "5790001089313",
     "network_tariff": 0.32, "charge_code": None, "region": "DK1",
     "municipalities": ["Herning", "Holstebro"]},
    {"code": "357", "name": "Forsyning Elnet A/S", "gln": "5790001095093",
     "network_tariff": 0.31, "charge_code": None, "region": "DK1",
     "municipalities": ["Holstebro"]},
    {"code": "342", "name": "Ikast El Net A/S", "gln": "5790001089320",
     "network_tariff": 0.30, "charge_code": None, "region": "DK1",
     "municipalities": ["Ikast-Brande"]},
    {"code": "532", "name": "Veksel A/S", "gln": "5790001089382",
     "network_tariff": 0.32, "charge_code": None, "region": "DK2",
     "municipalities": ["Langeland"]},
    {"code": "584", "name": "Midtfyns Elforsyning A.m.b.A.", "gln": "5790001095048",
     "network_tariff": 0.33, "charge_code": None, "region": "DK2",
     "municipalities": ["Faaborg-Midtfyn"]},
    {"code": "085", "name": "Læsø Elnet A/S", "gln": "5790001089290",
     "network_tariff": 0.35, "charge_code": None, "region": "DK1",
     "municipalities": ["Læsø"]},
    {"code": "341", "name": "Grindsted Elnet A/S", "gln": None,
     "network_tariff": 0.31, "charge_code": None, "region": "DK1", "municipalities": []},
    {"code": "370", "name": "Aal El-net A.m.b.a", "gln": None,
     "network_tariff": 0.33, "charge_code": None, "region": "DK1", "municipalities": []},
    {"code": "384", "name": "Tarm Elværk Net A/S", "gln": None,
     "network_tariff": 0.32, "charge_code": None, "region": "DK1", "municipalities": []},
    {"code": "757", "name": "Elektrus A/S", "gln": None,
     "network_tariff": 0.32, "charge_code": None, "region": "DK2", "municipalities": []},
    {"code": "860", "name": "Zeanet A/S", "gln": None,
     "network_tariff": 0.32, "charge_code": None, "region": "DK2", "municipalities": []},
]

# Fallback averages keyed by GLN, kr/kWh
FALLBACK_TARIFFS: Dict[str, float] = {
    "5790000705689": 0.217,  # Radius Elnet
    "5790001089030": 0.192,  # N1
    "5790000610976": 0.236,  # Cerius
    "5790000610853": 0.220,  # Vores Elnet
    "5790000392261": 0.316,  # TREFOR El-net
    "5790000392551": 0.641,  # TREFOR El-net Øst
    "5790000610280": 0.310,  # Konstant Net
    "5790001095024": 0.300,  # Nord Energi Net
    "5790000610846": 0.290,  # Dinel
    "5790000610839": 0.248,  # FLOW Elnet
    "5790001089375": 0.290,  # Ravdex
    "5790001089191": 0.300,  # Elinord
    "5790001089238": 0.300,  # Elnet Midt
    "5790001089542": 0.320,  # Hurup Elværk Net
    "5790001089351": 0.310,  # NOE Net
    "5790001089368": 0.310,  # RAH Net
    "5790001089313": 0.320,  # L-Net
    "5790001095093": 0.310,  # Forsyning Elnet
    "5790001089320": 0.284,  # Ikast El Net
    "5790001089382": 0.320,  # Veksel
    "5790001095048": 0.330,  # Midtfyns Elforsyning
    "5790001089290": 0.448,  # Læsø Elnet
}


class GridProviderRepository(BaseRepository):
    """Repository for static grid operator data."""

    def __init__(self, providers: Optional[List[Dict[str, Any]]] = None,
                 fallback_tariffs: Optional[Dict[str, float]] = None):
        self._df = pd.DataFrame(providers if providers is not None else GRID_PROVIDERS)
        self.fallback_tariffs = dict(
            fallback_tariffs if fallback_tariffs is not None else FALLBACK_TARIFFS)

    def find_all(self) -> pd.DataFrame:
        """Find all grid operators."""
        return self._df.copy()

    def find_by_id(self, record_id: Any) -> Optional[pd.Series]:
        """Find grid operator by DSO code."""
        matches = self._df[self._df['code'] == str(record_id)]
        return matches.iloc[0] if not matches.empty else None

    def count(self) -> int:
        """Count grid operators."""
        return len(self._df)

    def find_by_gln(self, gln: str) -> Optional[pd.Series]:
        """Find the first grid operator registered under a GLN."""
        matches = self._df[self._df['gln'] == gln]
        return matches.iloc[0] if not matches.empty else None

    def find_by_municipality(self, municipality: str) -> pd.DataFrame:
        """Find grid operators serving a municipality (case-insensitive)."""
        needle = municipality.strip().lower()
        mask = self._df['municipalities'].apply(
            lambda names: any(name.lower() == needle for name in names))
        return self._df[mask].copy()

    def find_charge_code(self, gln: str) -> Optional[str]:
        """Residential charge code for a GLN, if known."""
        row = self.find_by_gln(gln)
        if row is None or pd.isna(row['charge_code']):
            return None
        return row['charge_code']

    def find_fallback_tariff(self, operator_id: str) -> Optional[float]:
        """Static network tariff for a GLN or DSO code."""
        if operator_id in self.fallback_tariffs:
            return self.fallback_tariffs[operator_id]

        row = self.find_by_id(operator_id)
        if row is None:
            row = self.find_by_gln(operator_id)
        if row is None:
            return None
        return float(row['network_tariff'])
