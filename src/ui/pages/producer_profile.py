import pandas as pd
import streamlit as st

from models.domain import EVALUATION_SORT_LABELS, EvaluationSortKey
from services.catalog.dates import format_datetime_fr
from services.catalog.derivation import effective_display_name
from services.catalog.formatting import format_address_lines, rating_display
from services.catalog.producer_profile import derive_profile_view
from services.storefront_client import producer_detail_loader
from ui.utils.labels import page_label, stars_text
from ui.utils.load_cache import cached_load

STATE_DETAILS = "profile_details"
KEY_SORT = "profile_evaluation_sort"
KEY_PAGE = "profile_evaluation_page"


def show():
    st.title("Profil producteur")
    producer_id = st.number_input("Identifiant du producteur", min_value=1, step=1, value=None)
    if not producer_id:
        st.error("Identifiant du producteur manquant.")
        return

    result = _detail(int(producer_id))
    if result is None:
        return
    if result.error:
        st.error(result.error)
        st.button("Réessayer")
        return
    if result.data.producer is None:
        st.warning("Ce producteur est introuvable.")
        return

    sort_key = st.selectbox(
        "Trier les évaluations",
        [k.value for k in EvaluationSortKey],
        format_func=lambda v: EVALUATION_SORT_LABELS[EvaluationSortKey(v)],
        key=KEY_SORT,
        on_change=lambda: st.session_state.update({KEY_PAGE: 1}),
    )
    page = st.session_state.get(KEY_PAGE, 1)
    view_model = derive_profile_view(result.data, sort_key, page)
    st.session_state[KEY_PAGE] = view_model.evaluations.page

    st.subheader(view_model.name)
    st.caption(view_model.experience)
    st.write(stars_text(view_model.rating))

    _companies(view_model.companies)
    _bundles("Meilleures notes", view_model.best)
    _bundles("Récemment évalués", view_model.recent)
    _evaluations(view_model)


def _detail(producer_id: int):
    details = st.session_state.setdefault(STATE_DETAILS, {})
    if producer_id in details:
        return details[producer_id]
    with st.spinner("Chargement du producteur..."):
        result = cached_load(details, producer_id, producer_detail_loader(producer_id).load_sync)
    st.session_state[KEY_PAGE] = 1
    return result


def _companies(companies):
    if not companies:
        return
    st.markdown("### Commerces")
    for company in companies:
        with st.container(border=True):
            st.markdown(f"**{effective_display_name(company)}**")
            street, city_line = format_address_lines(company.address)
            if street:
                st.caption(street)
            st.caption(city_line)
            st.write(stars_text(rating_display(company.avg_rating, company.ratings_count)))


def _bundles(title, bundles):
    if not bundles:
        return
    st.markdown(f"### {title}")
    columns = st.columns(3)
    for column, bundle in zip(columns, bundles):
        with column:
            st.markdown(f"**{bundle.title}**")
            st.write(stars_text(rating_display(bundle.avg_rating, bundle.ratings_count)))
            if bundle.discounted_price:
                st.caption(f"{bundle.discounted_price} € (au lieu de {bundle.original_price or '—'} €)")


def _evaluations(view_model):
    page = view_model.evaluations
    st.markdown(f"### Évaluations ({page.total})")
    if not page.items:
        st.info("Aucune évaluation pour le moment.")
        return

    df = pd.DataFrame(
        [
            {
                "Date": format_datetime_fr(e.rated_at or e.ordered_at),
                "Client": e.user_display_name or "—",
                "Panier": e.bundle_title or "—",
                "Note": e.rating,
                "Commentaire": e.note or "",
            }
            for e in page.items
        ]
    )
    st.dataframe(df, use_container_width=True, hide_index=True)

    col1, col2, col3 = st.columns([1, 2, 1])
    with col1:
        st.button(
            "← Précédent",
            disabled=not page.has_previous,
            on_click=lambda: st.session_state.update({KEY_PAGE: page.page - 1}),
        )
    with col2:
        st.markdown(page_label(page.page, page.total_pages))
    with col3:
        st.button(
            "Suivant →",
            disabled=not page.has_next,
            on_click=lambda: st.session_state.update({KEY_PAGE: page.page + 1}),
        )
