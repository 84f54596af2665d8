from .comparer import Comparer
from .settings import Settings
from .source import CorpusSource, FileRef, ListingFetchError
from .source.identifier import RepositoryId, RepositoryFormatError, parse_repository
from .report.match import Match, MatchKind, MatchRule, classify
from .report.summary import ComparisonReport, RiskLevel, aggregate
from .text.normalize import NormalizedText, normalize
from .text.similarity import levenshtein_distance, similarity
from .utils.processor import Processor
