# Routes package init
"""
Relay Hub Backend: API Routes Package
========================================

What:  HTTP route handlers that accept browser requests and return relayed responses.

Route Inventory:
    - face.py:     POST /api/face-analysis   (image → Face++ detect)
    - weather.py:  GET  /api/weather         (city → OpenWeatherMap)
    - chat.py:     POST /api/chat            (message → chat completion)
    - health.py:   GET  /health              (liveness and credential status)

Design Principle:
    Routes are THIN: they check that the input is present, call one
    upstream service, and return. Calling and error mapping live in services.
"""
