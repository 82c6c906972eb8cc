"""Weather utility functions for renderers.

Pure unit conversions and display formatters. Values arrive in the
provider's units (°F, mph, hPa) and are converted to the configured
display units.
"""

from __future__ import annotations

HPA_PER_INHG = 33.8639
KPH_PER_MPH = 1.609344


def f_to_c(fahrenheit: float) -> float:
    """Convert Fahrenheit to Celsius."""
    return (fahrenheit - 32) * 5 / 9


def mph_to_kph(mph: float) -> float:
    """Convert miles per hour to kilometres per hour."""
    return mph * KPH_PER_MPH


def hpa_to_inhg(hpa: float) -> float:
    """Convert hectopascals to inches of mercury."""
    return hpa / HPA_PER_INHG


def format_temperature(fahrenheit: float, unit: str = "fahrenheit") -> str:
    if unit == "celsius":
        return f"{f_to_c(fahrenheit):.0f}°C"
    return f"{fahrenheit:.0f}°F"


def format_wind(mph: float, direction: str, unit: str = "mph") -> str:
    if unit == "kph":
        return f"{mph_to_kph(mph):.0f} km/h {direction}"
    return f"{mph:.0f} mph {direction}"


def format_pressure(hpa: float, unit: str = "hPa") -> str:
    if unit == "inHg":
        return f"{hpa_to_inhg(hpa):.2f} inHg"
    return f"{hpa:.0f} hPa"


def condition_class(condition: str) -> str:
    """CSS class name for a fishing condition ("Good" -> "condition-good")."""
    return f"condition-{condition.lower()}"
