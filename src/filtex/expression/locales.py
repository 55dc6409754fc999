"""Message catalogs for expression summaries."""

from __future__ import annotations

import logging


logger = logging.getLogger("filtex")

DEFAULT_LOCALE = "en"

_EN: dict[str, str] = {
    "or": "or",
    "and": "and",
    "group_join": ", and ",
    "field": "{field} {summary}",
    "quote": '"{text}"',
    "is": "is {values}",
    "is_not": "is not {values}",
    "compare": "is {op} {value}",
    "compare_not": "is not {op} {value}",
    "in_range": "is in range {range}",
    "not_in_range": "is not in range {range}",
    "null": "is null",
    "not_null": "is not null",
    "any_value": "is any value",
    "anywhere": "is anywhere",
    "circle": "{distance} {unit} from {location}",
    "box": "{start} to {end}",
    "north": "N",
    "south": "S",
    "east": "E",
    "west": "W",
    "distance.feet": "feet",
    "distance.meters": "meters",
    "distance.kilometers": "kilometers",
    "distance.miles": "miles",
    "is_point": "is {point}",
    "on": "is on {date}",
    "year": "is in year {year}",
    "fiscal_year": "is in fiscal year {year}",
    "quarter": "is in quarter {quarter}",
    "fiscal_quarter": "is in fiscal quarter {quarter}",
    "month": "is in month {month}",
    "before": "is before {date}",
    "after": "is after {date}",
    "range": "is from {start} until {end}",
    "range_interval": "is {interval} from {start}",
    "past": "is in the last {interval}",
    "past_complete": "is in the last {interval} (complete)",
    "ago": "{interval} ago",
    "from_now": "{interval} from now",
    "relative_range": "is {interval} starting {point}",
    "this": "this {unit}",
    "next": "next {unit}",
    "last": "last {unit}",
    "this_range": "is this {start} until the current {end}",
    "day.today": "today",
    "day.yesterday": "yesterday",
    "day.tomorrow": "tomorrow",
    "day.monday": "Monday",
    "day.tuesday": "Tuesday",
    "day.wednesday": "Wednesday",
    "day.thursday": "Thursday",
    "day.friday": "Friday",
    "day.saturday": "Saturday",
    "day.sunday": "Sunday",
    "unit.year": "year",
    "unit.years": "years",
    "unit.fiscal_year": "fiscal year",
    "unit.fiscal_years": "fiscal years",
    "unit.quarter": "quarter",
    "unit.quarters": "quarters",
    "unit.fiscal_quarter": "fiscal quarter",
    "unit.fiscal_quarters": "fiscal quarters",
    "unit.month": "month",
    "unit.months": "months",
    "unit.week": "week",
    "unit.weeks": "weeks",
    "unit.day": "day",
    "unit.days": "days",
    "unit.hour": "hour",
    "unit.hours": "hours",
    "unit.minute": "minute",
    "unit.minutes": "minutes",
    "unit.second": "second",
    "unit.seconds": "seconds",
}

_DE: dict[str, str] = {
    "or": "oder",
    "and": "und",
    "group_join": ", und ",
    "field": "{summary} ({field})",
    "quote": "„{text}“",
    "is": "ist {values}",
    "is_not": "ist nicht {values}",
    "compare": "ist {op} {value}",
    "compare_not": "ist nicht {op} {value}",
    "in_range": "liegt im Bereich {range}",
    "not_in_range": "liegt nicht im Bereich {range}",
    "null": "ist leer",
    "not_null": "ist nicht leer",
    "any_value": "ist ein beliebiger Wert",
    "anywhere": "ist überall",
    "circle": "{distance} {unit} von {location}",
    "box": "{start} bis {end}",
    "east": "O",
    "distance.feet": "Fuß",
    "distance.meters": "Meter",
    "distance.kilometers": "Kilometer",
    "distance.miles": "Meilen",
    "is_point": "ist {point}",
    "on": "ist am {date}",
    "year": "ist im Jahr {year}",
    "fiscal_year": "ist im Geschäftsjahr {year}",
    "quarter": "ist im Quartal {quarter}",
    "fiscal_quarter": "ist im Geschäftsquartal {quarter}",
    "month": "ist im Monat {month}",
    "before": "ist vor {date}",
    "after": "ist nach {date}",
    "range": "ist von {start} bis {end}",
    "range_interval": "ist {interval} ab {start}",
    "past": "ist in den letzten {interval}",
    "past_complete": "ist in den letzten {interval} (vollständig)",
    "ago": "vor {interval}",
    "from_now": "in {interval}",
    "relative_range": "ist {interval} ab {point}",
    "this": "dieses {unit}",
    "next": "nächstes {unit}",
    "last": "letztes {unit}",
    "this_range": "ist dieses {start} bis zum aktuellen {end}",
    "day.today": "heute",
    "day.yesterday": "gestern",
    "day.tomorrow": "morgen",
    "day.monday": "Montag",
    "day.tuesday": "Dienstag",
    "day.wednesday": "Mittwoch",
    "day.thursday": "Donnerstag",
    "day.friday": "Freitag",
    "day.saturday": "Samstag",
    "day.sunday": "Sonntag",
    "unit.year": "Jahr",
    "unit.years": "Jahre",
    "unit.fiscal_year": "Geschäftsjahr",
    "unit.fiscal_years": "Geschäftsjahre",
    "unit.quarter": "Quartal",
    "unit.quarters": "Quartale",
    "unit.fiscal_quarter": "Geschäftsquartal",
    "unit.fiscal_quarters": "Geschäftsquartale",
    "unit.month": "Monat",
    "unit.months": "Monate",
    "unit.week": "Woche",
    "unit.weeks": "Wochen",
    "unit.day": "Tag",
    "unit.days": "Tage",
    "unit.hour": "Stunde",
    "unit.hours": "Stunden",
    "unit.minute": "Minute",
    "unit.minutes": "Minuten",
    "unit.second": "Sekunde",
    "unit.seconds": "Sekunden",
}

_FR: dict[str, str] = {
    "or": "ou",
    "and": "et",
    "group_join": ", et ",
    "quote": "« {text} »",
    "is": "est {values}",
    "is_not": "n'est pas {values}",
    "compare": "est {op} {value}",
    "compare_not": "n'est pas {op} {value}",
    "in_range": "est dans l'intervalle {range}",
    "not_in_range": "n'est pas dans l'intervalle {range}",
    "null": "est vide",
    "not_null": "n'est pas vide",
    "any_value": "est une valeur quelconque",
    "anywhere": "est n'importe où",
    "circle": "{distance} {unit} de {location}",
    "box": "{start} à {end}",
    "west": "O",
    "distance.feet": "pieds",
    "distance.meters": "mètres",
    "distance.kilometers": "kilomètres",
    "distance.miles": "miles",
    "is_point": "est {point}",
    "on": "est le {date}",
    "year": "est en {year}",
    "fiscal_year": "est dans l'exercice {year}",
    "quarter": "est au trimestre {quarter}",
    "fiscal_quarter": "est au trimestre fiscal {quarter}",
    "month": "est au mois {month}",
    "before": "est avant {date}",
    "after": "est après {date}",
    "range": "est du {start} au {end}",
    "range_interval": "est {interval} à partir du {start}",
    "past": "est dans les derniers {interval}",
    "past_complete": "est dans les derniers {interval} (complets)",
    "ago": "il y a {interval}",
    "from_now": "dans {interval}",
    "relative_range": "est {interval} à partir de {point}",
    "this": "ce {unit}",
    "next": "le prochain {unit}",
    "last": "le dernier {unit}",
    "this_range": "est ce {start} jusqu'au {end} actuel",
    "day.today": "aujourd'hui",
    "day.yesterday": "hier",
    "day.tomorrow": "demain",
    "day.monday": "lundi",
    "day.tuesday": "mardi",
    "day.wednesday": "mercredi",
    "day.thursday": "jeudi",
    "day.friday": "vendredi",
    "day.saturday": "samedi",
    "day.sunday": "dimanche",
    "unit.year": "an",
    "unit.years": "ans",
    "unit.fiscal_year": "exercice",
    "unit.fiscal_years": "exercices",
    "unit.quarter": "trimestre",
    "unit.quarters": "trimestres",
    "unit.fiscal_quarter": "trimestre fiscal",
    "unit.fiscal_quarters": "trimestres fiscaux",
    "unit.month": "mois",
    "unit.months": "mois",
    "unit.week": "semaine",
    "unit.weeks": "semaines",
    "unit.day": "jour",
    "unit.days": "jours",
    "unit.hour": "heure",
    "unit.hours": "heures",
    "unit.minute": "minute",
    "unit.minutes": "minutes",
    "unit.second": "seconde",
    "unit.seconds": "secondes",
}

_ES: dict[str, str] = {
    "or": "o",
    "and": "y",
    "group_join": ", y ",
    "quote": "«{text}»",
    "is": "es {values}",
    "is_not": "no es {values}",
    "compare": "es {op} {value}",
    "compare_not": "no es {op} {value}",
    "in_range": "está en el rango {range}",
    "not_in_range": "no está en el rango {range}",
    "null": "es nulo",
    "not_null": "no es nulo",
    "any_value": "es cualquier valor",
    "anywhere": "está en cualquier lugar",
    "circle": "{distance} {unit} de {location}",
    "box": "{start} a {end}",
    "west": "O",
    "distance.feet": "pies",
    "distance.meters": "metros",
    "distance.kilometers": "kilómetros",
    "distance.miles": "millas",
    "is_point": "es {point}",
    "on": "es el {date}",
    "year": "es en el año {year}",
    "fiscal_year": "es en el año fiscal {year}",
    "quarter": "es en el trimestre {quarter}",
    "fiscal_quarter": "es en el trimestre fiscal {quarter}",
    "month": "es en el mes {month}",
    "before": "es antes de {date}",
    "after": "es después de {date}",
    "range": "es del {start} al {end}",
    "range_interval": "es {interval} desde el {start}",
    "past": "está en los últimos {interval}",
    "past_complete": "está en los últimos {interval} (completos)",
    "ago": "hace {interval}",
    "from_now": "dentro de {interval}",
    "relative_range": "es {interval} a partir de {point}",
    "this": "este {unit}",
    "next": "el próximo {unit}",
    "last": "el último {unit}",
    "this_range": "es este {start} hasta el {end} actual",
    "day.today": "hoy",
    "day.yesterday": "ayer",
    "day.tomorrow": "mañana",
    "day.monday": "lunes",
    "day.tuesday": "martes",
    "day.wednesday": "miércoles",
    "day.thursday": "jueves",
    "day.friday": "viernes",
    "day.saturday": "sábado",
    "day.sunday": "domingo",
    "unit.year": "año",
    "unit.years": "años",
    "unit.fiscal_year": "año fiscal",
    "unit.fiscal_years": "años fiscales",
    "unit.quarter": "trimestre",
    "unit.quarters": "trimestres",
    "unit.fiscal_quarter": "trimestre fiscal",
    "unit.fiscal_quarters": "trimestres fiscales",
    "unit.month": "mes",
    "unit.months": "meses",
    "unit.week": "semana",
    "unit.weeks": "semanas",
    "unit.day": "día",
    "unit.days": "días",
    "unit.hour": "hora",
    "unit.hours": "horas",
    "unit.minute": "minuto",
    "unit.minutes": "minutos",
    "unit.second": "segundo",
    "unit.seconds": "segundos",
}

CATALOGS: dict[str, dict[str, str]] = {
    "en": _EN,
    "de": _DE,
    "fr": _FR,
    "es": _ES,
}


def resolve_locale(locale: str | None) -> str:
    """Map a locale tag such as "en_US", "de-AT" or "FR" to a known catalog.

    Unknown tags resolve to the default locale.
    """
    if not locale:
        return DEFAULT_LOCALE
    tag = locale.strip().replace("_", "-").lower()
    if tag in CATALOGS:
        return tag
    language = tag.split("-", 1)[0]
    if language in CATALOGS:
        return language
    logger.debug("Unknown locale '%s', using '%s'", locale, DEFAULT_LOCALE)
    return DEFAULT_LOCALE


def message(locale: str, key: str, **values: object) -> str:
    """Format a catalog message, falling back to English for missing keys."""
    catalog = CATALOGS[resolve_locale(locale)]
    template = catalog.get(key, _EN[key])
    return template.format(**values)
