# Item Types Package
from .cloze import ClozeContent, ClozeDeletion, ClozeType
from .qa import QAContent, QAType

__all__ = ["ClozeContent", "ClozeDeletion", "ClozeType", "QAContent", "QAType"]
