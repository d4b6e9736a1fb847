"""Campus placement portal: Streamlit front end over the placement REST API."""

__version__ = "1.0.0"
