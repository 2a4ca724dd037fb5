"""
User-facing texts for scheduling denials, per locale.
"""

from typing import Dict, Optional

from config import settings

WEEKDAY_NAMES: Dict[str, Dict[str, str]] = {
    "en": {
        "monday": "Monday",
        "tuesday": "Tuesday",
        "wednesday": "Wednesday",
        "thursday": "Thursday",
        "friday": "Friday",
        "saturday": "Saturday",
        "sunday": "Sunday",
    },
    "pt-BR": {
        "monday": "Segunda-feira",
        "tuesday": "Terça-feira",
        "wednesday": "Quarta-feira",
        "thursday": "Quinta-feira",
        "friday": "Sexta-feira",
        "saturday": "Sábado",
        "sunday": "Domingo",
    },
}

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "closed_day": "The clinic is closed on this weekday ({day})",
        "before_opening": "Time is before opening. The clinic opens at {start}",
        "after_closing": "Time is after closing. The clinic closes at {end}",
        "professional_unavailable": "Professional unavailable at this time",
        "schedule_conflict": "There is already an appointment at this time",
    },
    "pt-BR": {
        "closed_day": "A clínica não funciona neste dia da semana ({day})",
        "before_opening": "Horário antes da abertura. A clínica abre às {start}",
        "after_closing": "Horário após o fechamento. A clínica fecha às {end}",
        "professional_unavailable": "Profissional indisponível neste horário",
        "schedule_conflict": "Já existe um agendamento neste horário",
    },
}


def weekday_name(day_key: str, locale: Optional[str] = None) -> str:
    return WEEKDAY_NAMES[settings.resolve_locale(locale or settings.MESSAGE_LOCALE)][day_key]


def render(key: str, locale: Optional[str] = None, **params: str) -> str:
    return MESSAGES[settings.resolve_locale(locale or settings.MESSAGE_LOCALE)][key].format(**params)
