"""
CEP weather gateway: resolves a Brazilian postal code to its city and reports the
city's current temperature in Celsius, Fahrenheit and Kelvin.
"""

__version__ = "1.0.0"
