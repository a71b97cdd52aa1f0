"""Glass quoting frontend package.

Streamlit frontend for a glass shop with:
- Frozen dataclass configuration
- Backend API client (cookie session, uniform error handling)
- Single-writer application state
- Reusable UI components
- Login and dashboard pages
"""

__version__ = "1.0.0"
