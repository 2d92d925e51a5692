"""Languages supported by the OCR engine (Tesseract traineddata codes)."""

from enum import Enum


class Language(Enum):
    """Trained model selector for text recognition."""
    AFR = "afr"
    ARA = "ara"
    CES = "ces"
    CHI_SIM = "chi_sim"
    CHI_TRA = "chi_tra"
    DAN = "dan"
    DEU = "deu"
    ELL = "ell"
    ENG = "eng"
    FIN = "fin"
    FRA = "fra"
    HEB = "heb"
    HIN = "hin"
    HUN = "hun"
    ITA = "ita"
    JPN = "jpn"
    KOR = "kor"
    NLD = "nld"
    NOR = "nor"
    POL = "pol"
    POR = "por"
    RUS = "rus"
    SPA = "spa"
    SWE = "swe"
    TUR = "tur"
    UKR = "ukr"
