#!/usr/bin/env python3
"""
CineVerse Dashboard
Single-file Streamlit frontend for browsing, comparing and administering
the movie database through the REST API.

Run:  python server.py              (API, in another terminal)
      streamlit run dashboard.py
"""

import sys
import pandas as pd
import streamlit as st
import plotly.express as px
import plotly.graph_objects as go
from pathlib import Path

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

INDUSTRY_COLORS = {
    'Hollywood': '#4C72B0',
    'Bollywood': '#DD8452',
    'Tollywood': '#55A868',
}

SORT_LABELS = {
    'gross': 'Worldwide gross',
    'year': 'Newest first',
    'title': 'Title (A-Z)',
    'rating': 'IMDb rating',
}

PER_PAGE = 12
MAX_COMPARE = 3

# ---------------------------------------------------------------------------
# Page config (must be first Streamlit call)
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="CineVerse",
    page_icon="\U0001F3AC",
    layout="wide",
    initial_sidebar_state="expanded",
)

PROJECT_ROOT = Path(__file__).resolve().parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cineverse.api_client import ApiError, CineVerseClient  # noqa: E402
from cineverse.config import load_config  # noqa: E402
from cineverse.constants import CURRENCIES, INDUSTRIES, INR_CRORE  # noqa: E402
from cineverse.validation import MovieValidator, parse_form_values  # noqa: E402
from cineverse import views  # noqa: E402

# Admin form fields, in display order: (canonical name, label)
FORM_FIELDS = [
    ('title', 'Title'),
    ('year', 'Year'),
    ('category', 'Category'),
    ('genres', 'Genres (comma separated)'),
    ('director', 'Director'),
    ('cast', 'Cast'),
    ('imdb_rating', 'IMDb rating'),
    ('worldwide_gross_usd', 'Worldwide gross (USD)'),
    ('worldwide_gross_inr', 'Worldwide gross (INR)'),
    ('budget_usd', 'Budget (USD)'),
    ('budget_inr', 'Budget (INR)'),
    ('language', 'Language'),
    ('runtime', 'Runtime'),
    ('release_date', 'Release date'),
    ('poster_url', 'Poster URL'),
    ('trailer_url', 'Trailer URL'),
    ('description', 'Description'),
]


# ---------------------------------------------------------------------------
# Data loading
# ---------------------------------------------------------------------------

@st.cache_resource
def get_client(base_url: str) -> CineVerseClient:
    return CineVerseClient(base_url)


@st.cache_data(ttl=60)
def load_movies(base_url: str):
    return get_client(base_url).fetch_movies()


@st.cache_data(ttl=60)
def load_top10(base_url: str):
    return get_client(base_url).fetch_top10()


@st.cache_data(ttl=60)
def load_stats(base_url: str):
    client = get_client(base_url)
    return client.fetch_stats(), client.fetch_industry_stats()


def refresh_data():
    """Drop cached API reads after a write."""
    st.cache_data.clear()


def _form_default(movie, name):
    value = movie.get(name) if movie else None
    if value is None:
        return ''
    if isinstance(value, list):
        return ', '.join(str(v) for v in value)
    return str(value)


# ---------------------------------------------------------------------------
# Section 1 – Movies
# ---------------------------------------------------------------------------

def render_movies(base_url: str, currency: str):
    st.header("Movies")
    movies = load_movies(base_url)
    if not movies:
        st.info("No movies yet. Import a CSV from the Admin section.")
        return

    filter_cols = st.columns([3, 2, 2])
    with filter_cols[0]:
        search = st.text_input("Search", placeholder="Title, director, cast or genre")
    with filter_cols[1]:
        category = st.selectbox("Category", [''] + views.categories(movies),
                                format_func=lambda c: c or 'All categories')
    with filter_cols[2]:
        sort_by = st.selectbox("Sort by", list(views.SORT_OPTIONS), format_func=SORT_LABELS.get)

    filtered = views.sort_movies(views.filter_movies(movies, search, category), sort_by, currency)
    st.write(f"Showing **{len(filtered):,}** of {len(movies):,} movies")

    if not filtered:
        st.warning("No movies match these filters.")
        return

    _, total_pages = views.paginate(filtered, 1, PER_PAGE)
    page = st.number_input("Page", min_value=1, max_value=total_pages, value=1, step=1)
    page_items, _ = views.paginate(filtered, int(page), PER_PAGE)

    grid = st.columns(3)
    for i, movie in enumerate(page_items):
        with grid[i % 3]:
            with st.container(border=True):
                if movie.get('poster_url'):
                    st.image(movie['poster_url'], width=160)
                st.subheader(movie.get('title', 'Untitled'))
                st.caption(f"{movie.get('year', 'N/A')} • {movie.get('category', 'N/A')} "
                           f"• {views.genres_string(movie)}")
                if movie.get('imdb_rating'):
                    st.write(f"⭐ {movie['imdb_rating']}/10")
                st.write(f"**Gross:** {views.format_currency(views.gross_amount(movie, currency), currency)}")
                with st.expander("Details"):
                    st.write(f"**Director:** {movie.get('director', 'N/A')}")
                    st.write(f"**Cast:** {movie.get('cast', 'N/A')}")
                    if movie.get('description'):
                        st.write(movie['description'])
                    if movie.get('trailer_url'):
                        st.markdown(f"[Watch trailer]({movie['trailer_url']})")


# ---------------------------------------------------------------------------
# Section 2 – Top 10
# ---------------------------------------------------------------------------

def render_top10(base_url: str, currency: str):
    st.header("Top 10 by Worldwide Gross")
    top = load_top10(base_url)
    if not top:
        st.info("No movies with a worldwide gross yet.")
        return

    df = pd.DataFrame({
        'rank': range(1, len(top) + 1),
        'title': [m.get('title') for m in top],
        'category': [m.get('category', '') for m in top],
        'year': [m.get('year') for m in top],
        'gross': [views.gross_amount(m, currency) for m in top],
    })
    df['gross_display'] = df['gross'].apply(lambda g: views.format_currency(g, currency))

    fig = px.bar(
        df, y='title', x='gross', orientation='h', color='category',
        color_discrete_map=INDUSTRY_COLORS, text='gross_display',
    )
    fig.update_layout(height=480, margin=dict(t=20, b=30, l=10, r=10),
                      yaxis=dict(autorange='reversed'), yaxis_title='',
                      xaxis_title=f"Worldwide gross ({currency})", legend_title_text='')
    st.plotly_chart(fig, use_container_width=True)
    st.dataframe(df[['rank', 'title', 'year', 'category', 'gross_display']]
                 .rename(columns={'gross_display': 'gross'}),
                 use_container_width=True, hide_index=True)


# ---------------------------------------------------------------------------
# Section 3 – Compare
# ---------------------------------------------------------------------------

def render_compare(base_url: str, currency: str):
    st.header("Compare Movies")
    movies = load_movies(base_url)
    if len(movies) < 2:
        st.info("Need at least two movies to compare.")
        return

    labels = {m['id']: f"{m.get('title')} ({m.get('year', 'N/A')})" for m in movies}
    selected_ids = st.multiselect(f"Pick up to {MAX_COMPARE} movies", list(labels),
                                  format_func=labels.get, max_selections=MAX_COMPARE)
    selected = [m for m in movies if m['id'] in selected_ids]
    if not selected:
        st.caption("Select movies to see them side by side.")
        return

    st.dataframe(views.comparison_rows(selected, currency), use_container_width=True)

    summary = views.comparison_summary(selected, currency)
    cols = st.columns(3)
    cols[0].metric("💰 Box office winner", summary['box_office_winner'] or 'N/A',
                   summary['box_office_amount'])
    cols[1].metric("⭐ Highest rated", summary['highest_rated'] or 'N/A',
                   f"{summary['highest_rating']}/10")
    if summary['year_range']:
        low, high = summary['year_range']
        cols[2].metric("📅 Year range", f"{low} - {high}")


# ---------------------------------------------------------------------------
# Section 4 – Analytics
# ---------------------------------------------------------------------------

def render_analytics(base_url: str, currency: str):
    st.header("Analytics")
    movies = load_movies(base_url)
    stats, industries = load_stats(base_url)

    if not movies or not stats:
        st.info("No data available. Is the API running?")
        return

    # --- Hero metrics ---
    revenue = stats['totalRevenueUSD'] if currency == 'USD' else stats['totalRevenueINR']
    budget = stats['totalBudgetUSD'] if currency == 'USD' else stats['totalBudgetINR']
    year_range = stats.get('yearRange') or {}
    cols = st.columns(5)
    cols[0].metric("Total Movies", f"{stats['totalMovies']:,}")
    cols[1].metric("Total Revenue", views.format_currency(revenue, currency))
    cols[2].metric("Total Budget", views.format_currency(budget, currency))
    cols[3].metric("Avg Rating", stats['avgRating'])
    if year_range.get('min'):
        cols[4].metric("Years", f"{year_range['min']} - {year_range['max']}")

    st.divider()

    st.subheader("Top 10 Box Office")
    top = load_top10(base_url)
    if top:
        top_df = pd.DataFrame({
            'title': [m.get('title') for m in top],
            'category': [m.get('category', '') for m in top],
            'gross': [views.gross_amount(m, currency) for m in top],
        })
        fig = px.bar(top_df, x='title', y='gross', color='category',
                     color_discrete_map=INDUSTRY_COLORS)
        fig.update_layout(height=380, margin=dict(t=20, b=40), xaxis_title='',
                          yaxis_title=f"Worldwide gross ({currency})", legend_title_text='')
        st.plotly_chart(fig, use_container_width=True)

    st.divider()

    left, right = st.columns(2)

    with left:
        st.subheader("Industry Share")
        counts = stats.get('industries', {})
        labels = [i for i in INDUSTRIES if counts.get(i)]
        if labels:
            fig = go.Figure(data=[go.Pie(
                labels=labels,
                values=[counts[i] for i in labels],
                hole=0.4,
                marker_colors=[INDUSTRY_COLORS.get(i, '#8C8C8C') for i in labels],
                textinfo='label+percent',
                hovertemplate='%{label}: %{value} movies (%{percent})<extra></extra>',
                sort=False,
            )])
            fig.update_layout(height=400, margin=dict(t=20, b=20, l=20, r=20))
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("No industry data.")

    with right:
        st.subheader("Top Genres")
        genres = views.genre_counts(movies)
        if genres:
            fig = go.Figure(data=[go.Pie(
                labels=[g for g, _ in genres],
                values=[c for _, c in genres],
                hole=0.55,
                textinfo='label+value',
            )])
            fig.update_layout(height=400, margin=dict(t=20, b=20, l=20, r=20))
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("No genre data.")

    st.divider()

    st.subheader("Revenue by Release Year")
    yearly = views.yearly_revenue(movies, currency)
    unit = '₹ crores' if currency == 'INR' else 'USD'
    if len(yearly):
        fig = px.line(yearly, x='year', y='revenue', markers=True,
                      labels={'revenue': f"Revenue ({unit})", 'year': ''})
        fig.update_layout(height=380, margin=dict(t=20, b=40))
        st.plotly_chart(fig, use_container_width=True)

        if len(yearly) >= 2:
            st.subheader("Year-on-Year Growth")
            yearly['direction'] = yearly['growth_pct'].apply(lambda g: 'up' if g >= 0 else 'down')
            fig = px.bar(yearly, x='year', y='growth_pct', color='direction',
                         color_discrete_map={'up': '#55A868', 'down': '#C44E52'},
                         labels={'growth_pct': 'Growth (%)', 'year': ''})
            fig.update_layout(height=320, margin=dict(t=20, b=40), showlegend=False)
            st.plotly_chart(fig, use_container_width=True)
    else:
        st.info("No release years recorded.")

    st.divider()

    left2, right2 = st.columns(2)

    with left2:
        st.subheader("Top Directors (lifetime gross)")
        directors = views.director_earnings(movies)
        if directors:
            d_df = pd.DataFrame(directors, columns=['director', 'crores'])
            fig = px.bar(d_df, y='director', x='crores', orientation='h',
                         color_discrete_sequence=['#DD8452'])
            fig.update_layout(height=max(250, len(d_df) * 50),
                              margin=dict(t=10, b=20, l=10, r=10),
                              yaxis_title='', xaxis_title='₹ Crores',
                              yaxis=dict(autorange='reversed'))
            st.plotly_chart(fig, use_container_width=True)
        else:
            st.info("No director data.")

    with right2:
        st.subheader("Industry Comparison")
        if industries:
            i_df = pd.DataFrame(industries)
            rev_col = 'revenueUSD' if currency == 'USD' else 'revenueINR'
            i_df['revenue'] = i_df[rev_col].apply(lambda v: views.format_currency(v, currency))
            st.dataframe(i_df[['industry', 'count', 'revenue', 'avgRating']],
                         use_container_width=True, hide_index=True)
            fig = px.bar(i_df, x='industry', y=rev_col, color='industry',
                         color_discrete_map=INDUSTRY_COLORS)
            fig.update_layout(height=300, showlegend=False, yaxis_title=f"Revenue ({currency})",
                              xaxis_title='', margin=dict(t=10, b=20))
            st.plotly_chart(fig, use_container_width=True)


# ---------------------------------------------------------------------------
# Section 5 – Admin
# ---------------------------------------------------------------------------

def render_login(client: CineVerseClient):
    st.subheader("Admin Login")
    with st.form('login'):
        username = st.text_input("Username")
        password = st.text_input("Password", type='password')
        if st.form_submit_button("Log in", type='primary'):
            try:
                result = client.admin_login(username, password)
            except ApiError as e:
                st.error(str(e))
            else:
                st.session_state['admin_token'] = result.get('token')
                st.rerun()


def render_movie_form(client: CineVerseClient, movie=None):
    """Add (movie=None) or edit form with validation before submit."""
    key = f"movie_form_{movie['id']}" if movie else 'movie_form_new'
    with st.form(key):
        raw = {}
        cols = st.columns(2)
        for i, (name, label) in enumerate(FORM_FIELDS):
            with cols[i % 2]:
                if name == 'category':
                    options = list(INDUSTRIES)
                    current = _form_default(movie, name)
                    if current and current not in options:
                        options.append(current)
                    raw[name] = st.selectbox(label, options,
                                             index=options.index(current) if current else 0,
                                             key=f"{key}_{name}")
                elif name == 'description':
                    raw[name] = st.text_area(label, _form_default(movie, name), key=f"{key}_{name}")
                else:
                    raw[name] = st.text_input(label, _form_default(movie, name), key=f"{key}_{name}")

        submitted = st.form_submit_button("💾 Save" if movie else "➕ Add movie", type='primary')

    if not submitted:
        return

    data = parse_form_values(raw)
    result = MovieValidator().validate(data)
    for err in result['errors']:
        st.error(err)
    for warn in result['warnings']:
        st.warning(warn)
    if not result['valid']:
        return

    try:
        if movie:
            client.update_movie(movie['id'], data)
            st.success(f"✅ Updated {data.get('title')}")
        else:
            saved = client.add_movie(data)
            st.success(f"✅ Added {saved.get('title')} (id {saved.get('id')})")
    except ApiError as e:
        st.error(str(e))
        return
    refresh_data()


def render_import(client: CineVerseClient):
    st.warning("⚠️ Importing REPLACES the whole movie collection. Ids are renumbered from 1.")
    upload_tab, path_tab = st.tabs(["Upload CSV", "Server path"])

    with upload_tab:
        upload = st.file_uploader("CSV file", type=['csv'])
        if upload is not None and st.button("Import upload", type='primary'):
            try:
                result = client.import_csv_file(upload.name, upload.getvalue())
            except ApiError as e:
                st.error(f"Import failed: {e}")
            else:
                st.success(result.get('message', 'Imported'))
                refresh_data()

    with path_tab:
        csv_path = st.text_input("CSV path on the server")
        if csv_path and st.button("Import from path", type='primary'):
            try:
                result = client.import_csv_path(csv_path)
            except ApiError as e:
                st.error(f"Import failed: {e}")
            else:
                st.success(result.get('message', 'Imported'))
                refresh_data()


def render_admin(base_url: str):
    st.header("Admin Panel")
    client = get_client(base_url)

    if not st.session_state.get('admin_token'):
        render_login(client)
        return

    if st.button("Log out"):
        st.session_state.pop('admin_token', None)
        st.rerun()

    movies_tab, add_tab, import_tab, contacts_tab = st.tabs(
        ["Movies", "Add Movie", "Import CSV", "Contact Messages"])

    with movies_tab:
        movies = load_movies(base_url)
        st.write(f"**{len(movies):,}** movies")
        st.dataframe(views.movies_frame(movies), use_container_width=True,
                     hide_index=True, height=360)

        if movies:
            labels = {m['id']: f"#{m['id']} {m.get('title')}" for m in movies}
            selected_id = st.selectbox("Select movie", list(labels), format_func=labels.get)
            selected = next(m for m in movies if m['id'] == selected_id)

            with st.expander("✏️ Edit", expanded=False):
                render_movie_form(client, selected)

            confirm = st.checkbox(f"Confirm delete of '{selected.get('title')}'",
                                  key=f"confirm_delete_{selected_id}")
            if st.button("🗑️ Delete", disabled=not confirm):
                try:
                    client.delete_movie(selected_id)
                except ApiError as e:
                    st.error(str(e))
                else:
                    st.success("Movie deleted")
                    refresh_data()
                    st.rerun()

    with add_tab:
        render_movie_form(client)

    with import_tab:
        render_import(client)

    with contacts_tab:
        contacts = client.fetch_contacts()
        if contacts:
            df = pd.DataFrame(contacts)
            df = df.sort_values('createdAt', ascending=False) if 'createdAt' in df else df
            st.dataframe(df, use_container_width=True, hide_index=True)
        else:
            st.info("No contact messages yet.")


# ---------------------------------------------------------------------------
# Section 6 – Contact
# ---------------------------------------------------------------------------

def render_contact(base_url: str):
    st.header("Contact Us")
    client = get_client(base_url)
    with st.form('contact', clear_on_submit=True):
        name = st.text_input("Name")
        email = st.text_input("Email")
        message = st.text_area("Message")
        if st.form_submit_button("Send", type='primary'):
            if not (name and email and message):
                st.error("Name, email, and message are required")
                return
            try:
                client.submit_contact(name, email, message)
            except ApiError as e:
                st.error(str(e))
            else:
                st.success("Thanks! Your message has been sent.")


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

def render_sidebar():
    """Render sidebar and return (api_base_url, currency, section_name)."""
    with st.sidebar:
        st.title("\U0001F3AC CineVerse")
        st.caption("Hollywood • Bollywood • Tollywood")

        st.divider()

        default_url = load_config(PROJECT_ROOT / 'config.yaml')['api_base_url']
        base_url = st.text_input("API URL", default_url)

        currency = st.radio("Currency", list(CURRENCIES), horizontal=True)

        st.divider()

        section = st.radio(
            "Section",
            ["Movies", "Top 10", "Compare", "Analytics", "Admin", "Contact"],
            label_visibility='collapsed',
        )

        st.divider()
        if st.session_state.get('admin_token'):
            st.caption("✅ Logged in as admin")
        st.caption(f"1 crore = {INR_CRORE:,} INR")

    return base_url, currency, section


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main():
    base_url, currency, section = render_sidebar()

    if section == "Movies":
        render_movies(base_url, currency)
    elif section == "Top 10":
        render_top10(base_url, currency)
    elif section == "Compare":
        render_compare(base_url, currency)
    elif section == "Analytics":
        render_analytics(base_url, currency)
    elif section == "Admin":
        render_admin(base_url)
    elif section == "Contact":
        render_contact(base_url)


if __name__ == '__main__':
    main()
