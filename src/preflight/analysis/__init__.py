"""Structural analysis of dataset files: classify, parse, infer types."""

from preflight.analysis.analyzer import analyze, analyze_all
from preflight.analysis.classifier import classify
from preflight.analysis.errors import ErrorClass, classify_error
from preflight.analysis.schemas import (
    Analysis,
    BinaryAnalysis,
    ColumnInfo,
    CsvAnalysis,
    ErrorAnalysis,
    JsonAnalysis,
    TextAnalysis,
)

__all__ = [
    "Analysis",
    "BinaryAnalysis",
    "ColumnInfo",
    "CsvAnalysis",
    "ErrorAnalysis",
    "ErrorClass",
    "JsonAnalysis",
    "TextAnalysis",
    "analyze",
    "analyze_all",
    "classify",
    "classify_error",
]
