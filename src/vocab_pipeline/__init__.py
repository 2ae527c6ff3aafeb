"""Frequency-ranked vocabulary list builder package."""

from .models import Contribution, DictionaryEntry, FrequencyRecord, OutputRow, Sense
from .normalize import normalize

__all__ = ["Sense", "DictionaryEntry", "Contribution", "FrequencyRecord", "OutputRow", "normalize"]
