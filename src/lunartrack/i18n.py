"""Simple two-language (en/es) label helper."""

_STRINGS: dict[str, dict[str, str]] = {
    "phase_new": {
        "en": "New Moon",
        "es": "Luna Nueva",
    },
    "phase_waxing_crescent": {
        "en": "Waxing Crescent",
        "es": "Creciente Iluminante",
    },
    "phase_first_quarter": {
        "en": "First Quarter",
        "es": "Cuarto Creciente",
    },
    "phase_waxing_gibbous": {
        "en": "Waxing Gibbous",
        "es": "Gibosa Creciente",
    },
    "phase_full": {
        "en": "Full Moon",
        "es": "Luna Llena",
    },
    "phase_waning_gibbous": {
        "en": "Waning Gibbous",
        "es": "Gibosa Menguante",
    },
    "phase_last_quarter": {
        "en": "Last Quarter",
        "es": "Cuarto Menguante",
    },
    "phase_waning_crescent": {
        "en": "Waning Crescent",
        "es": "Creciente Menguante",
    },
    "dir_N": {"en": "N", "es": "N"},
    "dir_NE": {"en": "NE", "es": "NE"},
    "dir_E": {"en": "E", "es": "E"},
    "dir_SE": {"en": "SE", "es": "SE"},
    "dir_S": {"en": "S", "es": "S"},
    "dir_SW": {"en": "SW", "es": "SO"},
    "dir_W": {"en": "W", "es": "O"},
    "dir_NW": {"en": "NW", "es": "NO"},
    "label_rise": {
        "en": "Rise",
        "es": "Salida",
    },
    "label_set": {
        "en": "Set",
        "es": "Puesta",
    },
    "label_transit": {
        "en": "Transit",
        "es": "Tránsito",
    },
    "label_phase": {
        "en": "Phase",
        "es": "Fase",
    },
    "label_window": {
        "en": "Window",
        "es": "Ventana",
    },
    "label_runs": {
        "en": "Horizon runs",
        "es": "Tramos",
    },
    "none": {
        "en": "not in window",
        "es": "fuera de la ventana",
    },
    "runs_summary": {
        "en": "{above} above, {below} below",
        "es": "{above} sobre, {below} bajo el horizonte",
    },
}


def t(key: str, lang: str) -> str:
    """Return the label for key in lang.

    Falls back to 'en', then to the key itself if not found.
    """
    entry = _STRINGS.get(key)
    if entry is None:
        return key
    return entry.get(lang) or entry.get("en") or key
