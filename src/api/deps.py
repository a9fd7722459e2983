from typing import Callable
from ..services.analysis_types import AnalysisResult
from ..services.form_recognizer import analyze_document

DocumentAnalyzer = Callable[[bytes], AnalysisResult]

def get_document_analyzer() -> DocumentAnalyzer:
    """Analyzer used by the documents router (overridden in tests)"""
    return analyze_document
