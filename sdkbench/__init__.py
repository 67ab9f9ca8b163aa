"""Latency comparison between the Google GenAI SDK and LangChain Google GenAI."""

from .clients import DirectModelClient, FrameworkModelClient, ModelClient
from .errors import (
    BenchmarkError,
    ComparisonError,
    MissingImageError,
    ToleranceExceededError,
)
from .prompt import Prompt, load_prompt
from .records import ResultRecord, format_duration, load_result, persist_result
from .runner import (
    ClientInvocation,
    ComparisonOutcome,
    compare_durations,
    run_comparison,
    run_sequential,
)

__all__ = [
    "BenchmarkError",
    "ClientInvocation",
    "ComparisonError",
    "ComparisonOutcome",
    "DirectModelClient",
    "FrameworkModelClient",
    "MissingImageError",
    "ModelClient",
    "Prompt",
    "ResultRecord",
    "ToleranceExceededError",
    "compare_durations",
    "format_duration",
    "load_prompt",
    "load_result",
    "persist_result",
    "run_comparison",
    "run_sequential",
]
