"""
Store.AdrienBird.net - Storefront product grid

Streamlit page listing Squarespace products, filtered from the sidebar.
"""

import sys
from pathlib import Path

# Ensure dashboard module is importable (required for Streamlit in Docker)
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import streamlit as st

from dashboard.components.product_grid import render_product_grid
from dashboard.utils.constants import DEFAULT_CONFIG, PRODUCT_GRID_LIMITS
from storefront.core.config import get_settings, resolve_squarespace_config
from storefront.core.logging_config import setup_logging

# Page configuration
st.set_page_config(
    page_title=DEFAULT_CONFIG["page_title"],
    page_icon=DEFAULT_CONFIG["page_icon"],
    layout="wide",
    initial_sidebar_state="expanded",
)

settings = get_settings()
setup_logging(settings)


def main():
    """Storefront page."""
    st.title(f"{DEFAULT_CONFIG['page_icon']} {DEFAULT_CONFIG['page_title']}")

    config = resolve_squarespace_config(settings)
    if not config.site_id:
        st.error("SQUARESPACE_SITE_ID is not configured")
        st.stop()

    with st.sidebar:
        st.markdown("## Filters")
        category = st.text_input("Category").strip() or None
        tag = st.text_input("Tag").strip() or None

        limits = sorted(set(PRODUCT_GRID_LIMITS + [settings.PRODUCT_GRID_DEFAULT_LIMIT]))
        limit = st.selectbox("Products per page", limits, index=limits.index(settings.PRODUCT_GRID_DEFAULT_LIMIT))

        if not config.has_credentials:
            st.warning("No Squarespace credentials configured")

    render_product_grid(config, category=category, tag=tag, limit=limit)


if __name__ == "__main__":
    main()
