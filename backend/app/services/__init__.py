# Services package init
"""
Relay Hub Backend: Services Layer
====================================

What:  One client per third-party API, sitting between routes and the network.
How:   Each service is built per request from the injected Settings and the
       shared httpx.AsyncClient (see http_client.py).

Service Inventory:
    - UpstreamService (abstract): send once, decode JSON, map failures
    - FaceAnalysisService: Face++ detect (multipart upload)
    - WeatherService: OpenWeatherMap current weather (GET)
    - ChatService: chat completion (JSON POST, bearer auth)
"""
