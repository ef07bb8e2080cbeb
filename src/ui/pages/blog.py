import streamlit as st

from services.catalog.blog_listing import ALL_CATEGORIES, derive_blog_view
from services.catalog.dates import format_date_fr
from services.storefront_client import blog_loader

STATE_POSTS = "blog_posts"
STATE_ERROR = "blog_load_error"
KEY_CATEGORY = "blog_category"
KEY_QUERY = "blog_query"

PLACEHOLDER_IMG = "https://images.unsplash.com/photo-1504754524776-8f4f37790ca0?w=1200&q=60&auto=format&fit=crop"


def show():
    st.title("Blog")
    st.write("Conseils, recettes et histoires pour une alimentation locale, durable et anti-gaspi.")

    posts = _posts()
    if st.session_state.get(STATE_ERROR):
        st.error(st.session_state[STATE_ERROR])
        return

    categories = derive_blog_view(posts).categories
    category = st.radio("Catégorie", categories, key=KEY_CATEGORY, horizontal=True)
    query = st.text_input("Recherche d’articles", key=KEY_QUERY, placeholder="Rechercher un article…")

    view_model = derive_blog_view(posts, query, category or ALL_CATEGORIES)
    if view_model.featured is not None:
        st.subheader("Article vedette")
        _post(view_model.featured, featured=True)

    if not view_model.posts:
        st.info("Aucun article ne correspond à votre recherche.")
        return

    columns = st.columns(3)
    for index, post in enumerate(view_model.posts):
        with columns[index % 3]:
            _post(post)


def _posts():
    if STATE_POSTS not in st.session_state:
        with st.spinner("Chargement des articles..."):
            result = blog_loader().load_sync()
        st.session_state[STATE_POSTS] = result.data if result else []
        st.session_state[STATE_ERROR] = result.error if result else None
    return st.session_state[STATE_POSTS]


def _post(post, featured: bool = False):
    with st.container(border=True):
        st.image(post.image or PLACEHOLDER_IMG, caption=post.image_alt or post.title)
        category = post.category.name if post.category and post.category.name else "—"
        st.caption(
            f"{category} · {format_date_fr(post.published_at)} · {post.read_time_min or 1} min de lecture"
        )
        st.markdown(f"### {post.title}" if featured else f"**{post.title}**")
        st.write(post.excerpt)
        if post.author_name:
            st.caption(f"Par {post.author_name}")
        st.caption(f"/blog/{post.slug}")
