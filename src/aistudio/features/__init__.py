"""The five studio tools."""

from aistudio.features.face_aging import FaceAgingFacade
from aistudio.features.hair_removal import HairRemovalFacade
from aistudio.features.script_to_movie import ScriptToMovieFacade
from aistudio.features.web_search import WebSearchFacade
from aistudio.features.youtube import YouTubeFacade

__all__ = [
    "FaceAgingFacade",
    "HairRemovalFacade",
    "ScriptToMovieFacade",
    "WebSearchFacade",
    "YouTubeFacade",
]
