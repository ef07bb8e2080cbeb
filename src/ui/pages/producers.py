import logging

import streamlit as st
import streamlit.components.v1 as components

from config import settings
from models.domain import (
    COMMERCE_SORT_LABELS,
    PRODUCER_SORT_LABELS,
    CommerceSortKey,
    ProducerSortKey,
    ViewMode,
)
from services.catalog import CatalogController, CatalogViewModel
from services.storefront_client import producers_loader
from ui.components.cards import commerce_card, producer_card
from ui.utils.labels import page_label, results_label

logger = logging.getLogger(__name__)

STATE_CONTROLLER = "catalog_controller"
STATE_ERROR = "catalog_load_error"
STATE_SCROLL_TOP = "catalog_scroll_top"

KEY_VIEW = "catalog_view"
KEY_QUERY = "catalog_query"
KEY_REGION = "catalog_region"
KEY_DEPARTMENTS = "catalog_departments"
KEY_SORT = "catalog_sort"

ALL_REGIONS = ""
COLUMNS = 3

VIEW_LABELS = {
    ViewMode.PRODUCER.value: "Voir par producteur",
    ViewMode.COMMERCE.value: "Voir par commerce",
}


def show():
    controller = _controller()
    if st.session_state.get(STATE_ERROR):
        st.error(st.session_state[STATE_ERROR])
        if st.button("Réessayer"):
            _reset()
            st.rerun()
        return

    view_model = controller.view()
    _header(view_model)
    _filters(controller, view_model)
    view_model = controller.view()
    _results(controller, view_model)


def _controller() -> CatalogController:
    controller = st.session_state.get(STATE_CONTROLLER)
    if controller is not None:
        return controller
    controller = CatalogController(page_size=settings.catalog_page_size)
    controller.on_page_change(_request_scroll_top)
    with st.spinner("Chargement des producteurs..."):
        result = producers_loader().load_sync()
    if result is not None:
        controller.load(result.data)
        st.session_state[STATE_ERROR] = result.error
    st.session_state[STATE_CONTROLLER] = controller
    return controller


def _reset():
    for key in [
        STATE_CONTROLLER,
        STATE_ERROR,
        STATE_SCROLL_TOP,
        KEY_VIEW,
        KEY_QUERY,
        KEY_REGION,
        KEY_DEPARTMENTS,
        KEY_SORT,
    ]:
        st.session_state.pop(key, None)


def _request_scroll_top(page: int) -> None:
    logger.debug(f"Catalog page changed to {page}")
    st.session_state[STATE_SCROLL_TOP] = True


def _header(view_model: CatalogViewModel):
    is_producer = view_model.view == ViewMode.PRODUCER
    st.title("Nos producteurs" if is_producer else "Nos commerces")
    st.write(
        "Découvrez des producteurs engagés près de chez vous et soutenez une agriculture durable."
        if is_producer
        else "Découvrez les points de vente/fermes associés aux producteurs et soutenez une agriculture durable."
    )

    stats = view_model.stats
    col1, col2, col3, col4 = st.columns(4)
    with col1:
        st.metric("Producteurs", stats.producers)
    with col2:
        st.metric("Commerces", stats.commerces)
    with col3:
        st.metric("Régions", stats.regions)
    with col4:
        st.metric("Départements", stats.departments)


def _filters(controller: CatalogController, view_model: CatalogViewModel):
    state = controller.state

    st.session_state[KEY_VIEW] = state.view.value
    st.radio(
        "Affichage",
        list(VIEW_LABELS.keys()),
        format_func=VIEW_LABELS.get,
        key=KEY_VIEW,
        horizontal=True,
        on_change=lambda: controller.set_view(st.session_state[KEY_VIEW]),
    )

    st.session_state[KEY_REGION] = state.region
    st.selectbox(
        "Région",
        [ALL_REGIONS, *view_model.regions],
        format_func=lambda r: r or "Toutes les régions",
        key=KEY_REGION,
        on_change=lambda: controller.set_region(st.session_state[KEY_REGION]),
    )

    col1, col2, col3 = st.columns([2, 2, 1])
    with col1:
        st.session_state[KEY_QUERY] = state.query_input
        st.text_input(
            "Recherche",
            key=KEY_QUERY,
            placeholder=(
                "Rechercher un producteur, une région, un département…"
                if state.view == ViewMode.PRODUCER
                else "Rechercher un commerce, un producteur, une région, un département…"
            ),
            on_change=lambda: controller.set_query_input(st.session_state[KEY_QUERY]),
        )
    with col2:
        st.session_state[KEY_DEPARTMENTS] = list(state.departments)
        st.multiselect(
            "Départements",
            view_model.departments,
            key=KEY_DEPARTMENTS,
            placeholder="Tous les départements",
            on_change=lambda: controller.set_departments(st.session_state[KEY_DEPARTMENTS]),
        )
    with col3:
        _sort_select(controller)


def _sort_select(controller: CatalogController):
    if controller.state.view == ViewMode.PRODUCER:
        options, labels = [k.value for k in ProducerSortKey], PRODUCER_SORT_LABELS
        to_key = ProducerSortKey
    else:
        options, labels = [k.value for k in CommerceSortKey], COMMERCE_SORT_LABELS
        to_key = CommerceSortKey
    st.session_state[KEY_SORT] = controller.state.sort_key
    st.selectbox(
        "Trier par",
        options,
        format_func=lambda v: labels[to_key(v)],
        key=KEY_SORT,
        on_change=lambda: controller.set_sort(st.session_state[KEY_SORT]),
    )


def _results(controller: CatalogController, view_model: CatalogViewModel):
    if st.session_state.pop(STATE_SCROLL_TOP, False):
        components.html("<script>window.parent.scrollTo({top: 0, behavior: 'smooth'});</script>", height=0)

    st.caption(results_label(view_model.total, view_model.view))
    if view_model.total == 0:
        noun = "producteur" if view_model.view == ViewMode.PRODUCER else "commerce"
        st.info(f"Aucun {noun} ne correspond à vos critères. Essayez un autre terme ou réinitialisez les filtres.")
        return

    card = producer_card if view_model.view == ViewMode.PRODUCER else commerce_card
    for start in range(0, len(view_model.items), COLUMNS):
        columns = st.columns(COLUMNS)
        for column, item in zip(columns, view_model.items[start:start + COLUMNS]):
            with column:
                card(item)

    if view_model.total_pages > 1:
        _pagination(controller, view_model)


def _pagination(controller: CatalogController, view_model: CatalogViewModel):
    col1, col2, col3 = st.columns([1, 2, 1])
    with col1:
        st.button("← Précédent", disabled=not view_model.has_previous, on_click=controller.previous_page)
    with col2:
        st.markdown(page_label(view_model.page, view_model.total_pages))
    with col3:
        st.button("Suivant →", disabled=not view_model.has_next, on_click=controller.next_page)
