import logging
import sys
from pathlib import Path

import streamlit as st

SRC_DIR = Path(__file__).resolve().parent.parent
if str(SRC_DIR) not in sys.path:
    sys.path.append(str(SRC_DIR))

from config import settings

logging.basicConfig(level=settings.log_level)

st.set_page_config(
    page_title=f"{settings.app_name} - Producteurs",
    page_icon="🥕",
    layout="wide",
)

page = st.sidebar.radio(
    "Navigation",
    ["Producteurs", "Blog", "Profil producteur"],
)

if page == "Producteurs":
    from ui.pages import producers
    producers.show()
elif page == "Blog":
    from ui.pages import blog
    blog.show()
elif page == "Profil producteur":
    from ui.pages import producer_profile
    producer_profile.show()
