"""wikiwiki: resolve a subject into a Wikidata entity, enrich it from public
sources and explore the relations around it."""

from .errors import NotFoundError
from .graph import Graph, GraphBuilder
from .language import LanguageContext, get_language, set_language
from .models import Candidate, Disambiguation, Entity
from .resolution import EntityResolver

__version__ = "0.1.0"

__all__ = [
    "Candidate",
    "Disambiguation",
    "Entity",
    "EntityResolver",
    "Graph",
    "GraphBuilder",
    "LanguageContext",
    "NotFoundError",
    "get_language",
    "set_language",
]
