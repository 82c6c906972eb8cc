"""World Weather Online marine API constants.

API docs: https://www.worldweatheronline.com/weather-api/api/docs/marine-weather-api.aspx
"""

MARINE_API = "https://api.worldweatheronline.com/premium/v1/marine.ashx"

# Days of tide extrema we read from the response (today + tomorrow)
TIDE_DAYS = 2

CACHE_SOURCE = "marine"
