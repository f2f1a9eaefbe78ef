# scenario_catalog/utils/text.py
import unicodedata
from typing import List

def normalize_quotes(s: str) -> str:
    return (s or "").replace("’","'").replace("‘","'").replace("“",'"').replace("”",'"').replace("–","-").replace("—","-")

def norm(s: str) -> str:
    """NFKC + quote folding + collapsed whitespace, casefolded."""
    s = unicodedata.normalize("NFKC", s or "")
    return " ".join(normalize_quotes(s).split()).casefold()

def as_str_list(val) -> List[str]:
    if val is None:
        return []
    if isinstance(val, str):
        return [val]
    if isinstance(val, (list, tuple, set, frozenset)):
        return [str(x) for x in val if x is not None]
    return []
