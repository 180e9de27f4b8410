from screensort.extraction.base import BaseExtractor
from screensort.extraction.book_extractor import BookExtractor
from screensort.extraction.factory import ExtractorFactory
from screensort.extraction.models import BookMetadata, MovieMetadata, MusicMetadata
from screensort.extraction.movie_extractor import MovieExtractor
from screensort.extraction.music_extractor import MusicExtractor

__all__ = [
    "BaseExtractor",
    "BookExtractor",
    "BookMetadata",
    "ExtractorFactory",
    "MovieExtractor",
    "MovieMetadata",
    "MusicExtractor",
    "MusicMetadata",
]
