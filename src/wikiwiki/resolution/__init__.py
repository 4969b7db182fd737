from .claims import extract_identifiers, infer_type
from .pipeline import EntityResolver, settle

__all__ = ["EntityResolver", "extract_identifiers", "infer_type", "settle"]
