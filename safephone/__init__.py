"""SafePhone DR: offline threat heuristics for URLs, emails, apps, WiFi and phone numbers."""

__version__ = "1.0.0"
