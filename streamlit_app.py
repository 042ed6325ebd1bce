import logging
import os

import streamlit as st

from utils.shared_ui import check_authentication, render_landing, render_sidebar


def main() -> None:
    st.set_page_config(page_title="Conversation Insights", page_icon="💬", layout="wide")

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )

    if not check_authentication():
        st.stop()

    config = render_sidebar()
    render_landing(config)


if __name__ == "__main__":
    main()
