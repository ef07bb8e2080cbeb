import streamlit as st

from models.schemas import CommerceRow, Producer
from services.catalog.derivation import (
    certification_codes,
    effective_bio,
    effective_city,
    effective_department,
    effective_display_name,
    effective_region,
)
from services.catalog.formatting import certification_preview, joined_text, rating_display
from ui.utils.labels import certifications_text, stars_text


def _place_line(city: str, region: str, department: str) -> str:
    parts = []
    if city:
        parts.append(f"📍 {city}")
    if region:
        parts.append(f"🏛️ {region}")
    if department:
        parts.append(f"🗺️ {department}")
    return " · ".join(parts)


def _avatar(image: str | None, name: str) -> None:
    if image:
        st.image(image, width=64)
    else:
        st.markdown(f"### {name[:1] or '?'}")


def producer_card(producer: Producer) -> None:
    name = effective_display_name(producer)
    with st.container(border=True):
        _avatar(producer.avatar, name)
        st.markdown(f"**{name}**")
        st.caption(joined_text(producer.joined_at))
        st.write(stars_text(rating_display(producer.avg_rating, producer.ratings_count)))
        place = _place_line(effective_city(producer), effective_region(producer), effective_department(producer))
        if place:
            st.caption(place)
        st.write(effective_bio(producer))
        certs = certifications_text(*certification_preview(certification_codes(producer)))
        if certs:
            st.caption(f"✅ {certs}")
        st.caption(f"{len(producer.commerces)} commerce(s)")


def commerce_card(row: CommerceRow) -> None:
    company = row.company
    name = effective_display_name(company)
    with st.container(border=True):
        _avatar(company.logo, name)
        st.markdown(f"**{name}**")
        st.caption(f"Producteur : {effective_display_name(row.producer)}")
        st.write(stars_text(rating_display(company.avg_rating, company.ratings_count)))
        place = _place_line(effective_city(company), effective_region(company), effective_department(company))
        if place:
            st.caption(place)
        if company.description:
            st.write(company.description)
        certs = certifications_text(*certification_preview(certification_codes(company)))
        if certs:
            st.caption(f"✅ {certs}")
