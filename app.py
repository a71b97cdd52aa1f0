"""Glass quoting application entry point.

Simple redirect to the Streamlit app.

Run with: streamlit run app.py (requires the backend API running separately,
see API_BASE_URL in .env.example)
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

# Import and run the frontend app
from glassquote.app import main

if __name__ == "__main__":
    main()
