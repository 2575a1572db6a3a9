from ember_quality.storage.results_store import ResultsStore

__all__ = ["ResultsStore"]
