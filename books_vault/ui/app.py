"""Streamlit front end for Books Vault.

Rendering only: every action is delegated to BooksVault.
"""

import streamlit as st

from books_vault.config import load_config
from books_vault.search.sorter import SortOption, configure_collation
from books_vault.service import BooksVault
from books_vault.storage.codec import ExportError, export_filename
from books_vault.validation.validators import find_duplicate_words, today_date

SORT_LABELS: dict[SortOption, str] = {
    SortOption.DATE_DESC: "Date (newest first)",
    SortOption.DATE_ASC: "Date (oldest first)",
    SortOption.TITLE_ASC: "Title (A-Z)",
    SortOption.TITLE_DESC: "Title (Z-A)",
    SortOption.PAGES_DESC: "Pages (most first)",
    SortOption.PAGES_ASC: "Pages (fewest first)",
}

FORM_FIELDS = ("title", "author", "pages", "tag", "date", "notes")


@st.cache_resource
def get_vault() -> BooksVault:
    configure_collation()
    vault = BooksVault.from_config(load_config())
    seeded = vault.load_sample_data()
    if not seeded.ok:
        st.session_state["seed_warning"] = seeded.message
    return vault


def render_dashboard(vault: BooksVault) -> None:
    dashboard = vault.dashboard()
    stats = dashboard.stats
    unit = dashboard.settings.page_unit

    cols = st.columns(5)
    cols[0].metric("Total books", stats.total_books)
    cols[1].metric(f"Total {unit}", f"{stats.total_pages:,}")
    cols[2].metric("Average length", stats.average_length)
    cols[3].metric("Top tag", stats.top_tag or "-")
    cols[4].metric("Top author", stats.top_author or "-")

    goal = dashboard.goal
    st.subheader("Reading goal")
    st.progress(goal.percentage / 100, text=f"{goal.percentage:.1f}%")
    if goal.status == "remaining":
        st.caption(f"{goal.remaining:,} {unit} remaining to reach your goal of {goal.target_pages:,}")
    elif goal.status == "reached":
        st.caption(f"You've reached your goal of {goal.target_pages:,} {unit}!")
    else:
        st.caption(f"You've exceeded your goal by {abs(goal.remaining):,} {unit}!")

    left, right = st.columns(2)
    with left:
        st.subheader("Books by weekday")
        st.bar_chart({bucket.label: bucket.count for bucket in stats.weekdays})
    with right:
        st.subheader("Top tags")
        if not stats.tag_distribution:
            st.caption("No data")
        for tag_slice in stats.tag_distribution:
            st.write(f"{tag_slice.tag} ({tag_slice.percent}%)")


def render_books(vault: BooksVault) -> None:
    suggestions = vault.suggestions()
    expression = st.text_input(
        "Search (regular expression)",
        help="Authors: " + ", ".join(suggestions.authors[:5]),
    )
    case_sensitive = st.checkbox("Case sensitive", value=False)
    sort = st.selectbox(
        "Sort by",
        options=list(SORT_LABELS),
        format_func=lambda option: SORT_LABELS[option],
    )

    view = vault.search(expression, case_sensitive=case_sensitive, sort=sort)
    if view.error:
        st.error(view.error)
        return
    if expression:
        st.caption(f"Searching with pattern: {expression} ({len(view.books)} found)")

    for book in view.books:
        with st.container(border=True):
            st.markdown(
                f"**{view.highlight(book.title)}** by {view.highlight(book.author)}"
                f" · {view.highlight(book.tag)} · {book.pages} pages · {view.highlight(book.date)}",
                unsafe_allow_html=True,
            )
            if book.notes:
                st.markdown(view.highlight(book.notes), unsafe_allow_html=True)
            edit_col, delete_col = st.columns(2)
            if edit_col.button("Edit", key=f"edit-{book.id}"):
                st.session_state["editing_id"] = book.id
                st.rerun()
            if delete_col.button("Delete", key=f"delete-{book.id}"):
                vault.delete_book(book.id)
                st.toast("Book deleted successfully")
                st.rerun()


def render_form(vault: BooksVault) -> None:
    editing_id = st.session_state.get("editing_id")
    existing = vault.get_book(editing_id) if editing_id else None
    defaults = existing.model_dump() if existing else {"date": today_date()}
    errors: dict[str, str] = st.session_state.pop("form_errors", {})

    st.subheader("Edit book" if existing else "Add book")
    with st.form("book-form", clear_on_submit=existing is None):
        values: dict[str, str] = {}
        for name in FORM_FIELDS:
            widget = st.text_area if name == "notes" else st.text_input
            values[name] = widget(name.capitalize(), value=str(defaults.get(name, "")))
            if name in errors:
                st.error(errors[name])
        submitted = st.form_submit_button("Save")

    if existing and st.button("Cancel"):
        st.session_state.pop("editing_id", None)
        st.rerun()

    if not submitted:
        return

    result = vault.submit_book(values, book_id=existing.id if existing else None)
    if not result.ok:
        st.session_state["form_errors"] = result.errors
        st.error(result.message)
        return

    repeated = find_duplicate_words(values["notes"])
    if repeated:
        st.info("Repeated words in notes: " + ", ".join(repeated))
    st.session_state.pop("editing_id", None)
    st.success(result.message)


def render_settings(vault: BooksVault) -> None:
    st.subheader("Reading goal")
    target = st.number_input(
        "Target pages", min_value=1, step=50, value=vault.settings.get().target_pages
    )
    if st.button("Set target"):
        try:
            settings = vault.set_target_pages(target)
            st.success(f"Reading goal set to {settings.target_pages:,} pages!")
        except ValueError as exc:
            st.error(str(exc))

    st.subheader("Export")
    try:
        st.download_button(
            "Download JSON",
            data=vault.export_json(),
            file_name=export_filename(),
            mime="application/json",
        )
    except ExportError as exc:
        st.error(str(exc))

    st.subheader("Import")
    upload = st.file_uploader("Import JSON", type=["json"])
    if upload is not None and st.button("Import"):
        result = vault.import_json(upload.getvalue())
        if result.valid:
            st.success("Data imported successfully!")
        else:
            st.error("Import failed: " + ", ".join(result.messages))

    st.subheader("Danger zone")
    confirm = st.checkbox("I understand this deletes ALL books")
    if st.button("Clear all data", disabled=not confirm):
        vault.clear_all()
        st.success("All data cleared")


def main() -> None:
    st.set_page_config(page_title="Books Vault", layout="wide")
    vault = get_vault()

    if "seed_warning" in st.session_state:
        st.warning(st.session_state.pop("seed_warning"))

    pages = {
        "Dashboard": render_dashboard,
        "Books": render_books,
        "Add / Edit": render_form,
        "Settings": render_settings,
    }
    default = "Add / Edit" if st.session_state.get("editing_id") else "Dashboard"
    choice = st.sidebar.radio("Section", list(pages), index=list(pages).index(default))
    pages[choice](vault)


main()
