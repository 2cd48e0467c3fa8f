"""
Streamlit Frontend for the Personal Finance Tracker

One page per panel: Transactions, Budgets, Reports, Reminders, Advanced
Transactions, Charts, Categories and Settings. The File menu (CSV
import/export, text report export, Save / Load) lives in the sidebar.

DESIGN PRINCIPLES:
1. Every button calls exactly one handler
2. Every handler result is shown to the user
3. Nothing is written to disk without an explicit action

Reminder notifications are produced by a background thread. Streamlit can
only draw from the script thread, so they are queued and shown on the
next rerun.

Run with: streamlit run app/main.py
"""

import html
from datetime import date, timedelta

import pandas as pd
import streamlit as st

from finance_tracker.audit import configure_logging
from finance_tracker.config import get_settings, validate_all_settings
from finance_tracker.models.records import TransactionType
from finance_tracker.orchestrator import CommandResult, FinanceTracker, create_app_components


TRANSACTION_COLUMNS = ["Date", "Type", "Category", "Amount", "Description"]
REMINDER_COLUMNS = ["Due Date", "Description", "Status"]


# Page configuration
st.set_page_config(
    page_title="Personal Finance Tracker",
    page_icon="💰",
    layout="wide",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
        margin-top: 10px;
    }
    .report-box {
        padding: 20px;
        background-color: #f4f6f8;
        border-radius: 10px;
        border-left: 5px solid #2c3e50;
        margin: 10px 0;
        font-family: monospace;
        white-space: pre;
    }
    .big-number {
        font-size: 2.5em;
        font-weight: bold;
        color: #2c3e50;
    }
</style>
""", unsafe_allow_html=True)


@st.cache_resource
def get_components() -> FinanceTracker:
    """Get or create application components (cached), and start the reminder check."""
    configure_logging(get_settings().app.log_level)
    tracker = create_app_components()
    tracker.start()
    return tracker


def show_result(result: CommandResult) -> None:
    """Show a handler result the way the user should see it."""
    if result.success:
        st.success(result.message)
        return
    st.error(result.message)
    for issue in result.issues:
        st.markdown(f"- **{issue.field}**: {issue.message}")


def transactions_frame(rows: list[list[str]]) -> pd.DataFrame:
    return pd.DataFrame(rows, columns=TRANSACTION_COLUMNS)


def main():
    """Main application entry point."""
    try:
        tracker = get_components()
    except Exception as e:
        st.error(f"Failed to initialize: {e}")
        st.stop()

    if tracker.startup_result is not None and not tracker.startup_result.success:
        st.error(f"Stored data could not be loaded: {tracker.startup_result.message}")

    for message in tracker.notifications.drain():
        st.toast(message, icon="⏰")
        st.warning(message)

    # Sidebar navigation
    st.sidebar.title("💰 Finance Tracker")
    st.sidebar.markdown("---")

    page = st.sidebar.radio(
        "Navigate to:",
        [
            "🧾 Transactions",
            "💵 Budgets",
            "📊 Reports",
            "⏰ Reminders",
            "🔎 Advanced Transactions",
            "📈 Charts",
            "🏷️ Categories",
            "⚙️ Settings",
        ],
        index=0,
    )

    st.sidebar.markdown("---")
    render_file_menu(tracker)

    # Route to appropriate page
    if page == "🧾 Transactions":
        render_transactions_page(tracker)
    elif page == "💵 Budgets":
        render_budgets_page(tracker)
    elif page == "📊 Reports":
        render_reports_page(tracker)
    elif page == "⏰ Reminders":
        render_reminders_page(tracker)
    elif page == "🔎 Advanced Transactions":
        render_advanced_page(tracker)
    elif page == "📈 Charts":
        render_charts_page(tracker)
    elif page == "🏷️ Categories":
        render_categories_page(tracker)
    elif page == "⚙️ Settings":
        render_settings_page(tracker)


def render_file_menu(tracker: FinanceTracker):
    """Sidebar File menu."""
    st.sidebar.subheader("📁 File")

    csv_path = st.sidebar.text_input("CSV file", value="transactions.csv")
    col1, col2 = st.sidebar.columns(2)
    with col1:
        if st.button("Export CSV"):
            st.session_state.file_result = tracker.files.export_csv(csv_path)
    with col2:
        if st.button("Import CSV"):
            st.session_state.file_result = tracker.files.import_csv(csv_path)

    pdf_path = st.sidebar.text_input("Report file", value="report.pdf")
    if st.sidebar.button("Export PDF"):
        st.session_state.file_result = tracker.files.export_pdf(pdf_path)

    col1, col2 = st.sidebar.columns(2)
    with col1:
        if st.button("Save Data"):
            st.session_state.file_result = tracker.files.save()
    with col2:
        if st.button("Load Data"):
            st.session_state.file_result = tracker.files.load()

    result = st.session_state.pop("file_result", None)
    if result is not None:
        if result.success:
            st.sidebar.success(result.message)
        else:
            st.sidebar.error(result.message)


def render_transactions_page(tracker: FinanceTracker):
    """Render the transactions table and the add / edit / delete forms."""
    st.title("🧾 Transactions")

    rows = tracker.transactions.rows()
    if rows:
        st.dataframe(transactions_frame(rows), use_container_width=True, hide_index=True)
    else:
        st.info("No transactions yet. Add your first one below.")

    st.markdown("---")
    st.subheader("➕ Add Transaction")

    type_ = st.selectbox("Type", options=[t.value for t in TransactionType], key="add_type")
    with st.form("add_transaction", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            amount = st.text_input("Amount *")
            category = st.selectbox("Category", options=tracker.categories.categories_for(type_))
        with col2:
            date_text = st.text_input("Date (YYYY-MM-DD) *", value=date.today().isoformat())
            description = st.text_input("Description")

        if st.form_submit_button("Add Transaction", type="primary"):
            show_result(tracker.transactions.add(amount, type_, category, date_text, description))

    transactions = tracker.state.transactions
    if not transactions:
        return

    st.markdown("---")
    st.subheader("✏️ Edit or Delete")

    labels = {t.id: " | ".join(t.to_table_row(tracker.currency_symbol)) for t in transactions}
    selected_id = st.selectbox(
        "Transaction",
        options=list(labels),
        format_func=lambda transaction_id: labels[transaction_id],
    )
    selected = transactions[tracker.state.find_transaction(selected_id)]

    with st.form("edit_transaction"):
        col1, col2 = st.columns(2)
        with col1:
            edit_amount = st.text_input("Amount", value=f"{selected.amount:.2f}")
            edit_type = st.selectbox(
                "Type",
                options=[t.value for t in TransactionType],
                index=[t for t in TransactionType].index(selected.type),
            )
            edit_category = st.text_input("Category", value=selected.category)
        with col2:
            edit_date = st.text_input("Date (YYYY-MM-DD)", value=selected.date.isoformat())
            edit_description = st.text_input("Description", value=selected.description)

        col1, col2 = st.columns(2)
        with col1:
            if st.form_submit_button("💾 Save Changes"):
                show_result(tracker.transactions.edit(
                    selected_id, edit_amount, edit_type, edit_category, edit_date, edit_description
                ))
        with col2:
            if st.form_submit_button("🗑️ Delete"):
                show_result(tracker.transactions.delete(selected_id))


def render_budgets_page(tracker: FinanceTracker):
    """Render budgets with progress indicators."""
    st.title("💵 Budgets")

    progress = tracker.budgets.progress()
    if progress:
        for item in progress:
            st.progress(item.fraction, text=item.label(tracker.currency_symbol))
            if item.over_budget:
                st.caption(f"⚠️ Over budget by {tracker.currency_symbol}{item.spent - item.limit:.2f}")
    else:
        st.info("No budgets defined.")

    st.markdown("---")
    st.subheader("➕ Set Budget")
    st.caption("Setting a budget for an existing category resets its spent amount.")

    with st.form("set_budget", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            category = st.selectbox("Category", options=tracker.categories.list())
        with col2:
            limit = st.text_input("Limit *")
        if st.form_submit_button("Set Budget", type="primary"):
            show_result(tracker.budgets.set(category, limit))

    budgets = tracker.state.budgets
    if not budgets:
        return

    st.markdown("---")
    st.subheader("✏️ Edit or Delete")

    selected = st.selectbox("Budget", options=list(budgets))
    budget = budgets[selected]
    with st.form("edit_budget"):
        col1, col2 = st.columns(2)
        with col1:
            limit = st.text_input("Limit", value=f"{budget.limit:.2f}")
        with col2:
            spent = st.text_input("Spent", value=f"{budget.spent:.2f}")

        col1, col2 = st.columns(2)
        with col1:
            if st.form_submit_button("💾 Save Changes"):
                show_result(tracker.budgets.edit(selected, limit, spent))
        with col2:
            if st.form_submit_button("🗑️ Delete"):
                show_result(tracker.budgets.delete(selected))


def render_reports_page(tracker: FinanceTracker):
    """Render spending breakdown and period comparison."""
    st.title("📊 Reports")

    reports = tracker.reports
    report = tracker.report_commands.spending()

    col1, col2 = st.columns(2)
    with col1:
        st.markdown("### Spending by Category")
        st.markdown(f'<div class="big-number">{tracker.currency_symbol}{report.total:,.2f}</div>',
                    unsafe_allow_html=True)
        st.markdown(f'<div class="report-box">{html.escape(reports.format_spending_report(report))}</div>',
                    unsafe_allow_html=True)

    with col2:
        st.markdown("### Compare Periods")
        today = date.today()
        with st.form("compare_periods"):
            current_from = st.text_input("Current from", value=today.replace(day=1).isoformat())
            current_to = st.text_input("Current to", value=today.isoformat())
            last_month_end = today.replace(day=1) - timedelta(days=1)
            previous_from = st.text_input("Previous from", value=last_month_end.replace(day=1).isoformat())
            previous_to = st.text_input("Previous to", value=last_month_end.isoformat())
            submitted = st.form_submit_button("Compare", type="primary")

        if submitted:
            result = tracker.report_commands.compare_periods(
                current_from, current_to, previous_from, previous_to
            )
            if result.success:
                st.markdown(f'<div class="report-box">{html.escape(result.message)}</div>', unsafe_allow_html=True)
            else:
                show_result(result)


def render_reminders_page(tracker: FinanceTracker):
    """Render reminders with add / mark paid / edit / delete."""
    st.title("⏰ Reminders")

    due = tracker.reminders.due()
    if due:
        st.warning(f"{len(due)} payment(s) due today or overdue.")

    rows = tracker.reminders.rows()
    if rows:
        st.dataframe(pd.DataFrame(rows, columns=REMINDER_COLUMNS), use_container_width=True, hide_index=True)
    else:
        st.info("No reminders yet.")

    st.markdown("---")
    st.subheader("➕ Add Reminder")
    with st.form("add_reminder", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            due_date = st.text_input("Due date (YYYY-MM-DD) *", value=date.today().isoformat())
        with col2:
            description = st.text_input("Description *")
        if st.form_submit_button("Add Reminder", type="primary"):
            show_result(tracker.reminders.add(due_date, description))

    reminders = tracker.state.reminders
    if not reminders:
        return

    st.markdown("---")
    st.subheader("✏️ Manage Reminder")

    labels = {r.id: " | ".join(r.to_table_row()) for r in reminders}
    selected_id = st.selectbox(
        "Reminder",
        options=list(labels),
        format_func=lambda reminder_id: labels[reminder_id],
    )
    selected = reminders[tracker.state.find_reminder(selected_id)]

    with st.form("edit_reminder"):
        col1, col2 = st.columns(2)
        with col1:
            edit_due = st.text_input("Due date", value=selected.due_date.isoformat())
        with col2:
            edit_description = st.text_input("Description", value=selected.description)

        col1, col2, col3 = st.columns(3)
        with col1:
            if st.form_submit_button("✅ Mark as Paid", disabled=selected.paid):
                show_result(tracker.reminders.mark_paid(selected_id))
        with col2:
            if st.form_submit_button("💾 Save Changes"):
                show_result(tracker.reminders.edit(selected_id, edit_due, edit_description))
        with col3:
            if st.form_submit_button("🗑️ Delete"):
                show_result(tracker.reminders.delete(selected_id))


def render_advanced_page(tracker: FinanceTracker):
    """Render the search / date-range filter view."""
    st.title("🔎 Advanced Transactions")

    col1, col2, col3 = st.columns([2, 1, 1])
    with col1:
        search = st.text_input("Search", placeholder="Matches any column")
    with col2:
        date_from = st.text_input("From (YYYY-MM-DD)")
    with col3:
        date_to = st.text_input("To (YYYY-MM-DD)")

    result = tracker.transactions.filter(search, date_from, date_to)
    if not result.success:
        show_result(result)
        return

    st.caption(result.message)
    if result.data:
        rows = [t.to_table_row(tracker.currency_symbol) for t in result.data]
        st.dataframe(transactions_frame(rows), use_container_width=True, hide_index=True)
    else:
        st.info("No transactions match the selected filters")


def render_charts_page(tracker: FinanceTracker):
    """Render the spending chart and its ASCII rendering."""
    st.title("📈 Charts")

    report = tracker.report_commands.spending()
    if report.is_empty:
        st.info("No expenses recorded.")
        return

    df = pd.DataFrame(
        [{"Category": item.category, "Amount": float(item.amount)} for item in report.categories]
    ).set_index("Category")
    st.bar_chart(df)

    with st.expander("ASCII Chart"):
        st.code(tracker.reports.ascii_chart(report), language=None)


def render_categories_page(tracker: FinanceTracker):
    """Render the category list with add / remove."""
    st.title("🏷️ Categories")
    st.caption("Categories are stored with Save Data.")

    for name in tracker.categories.list():
        st.markdown(f"- {name}")

    st.markdown("---")
    col1, col2 = st.columns(2)
    with col1:
        with st.form("add_category", clear_on_submit=True):
            name = st.text_input("New category")
            if st.form_submit_button("Add Category", type="primary"):
                show_result(tracker.categories.add(name))
    with col2:
        with st.form("remove_category"):
            name = st.selectbox("Category", options=tracker.categories.list())
            if st.form_submit_button("Remove Category"):
                show_result(tracker.categories.remove(name))


def render_settings_page(tracker: FinanceTracker):
    """Render the settings page."""
    st.title("⚙️ Settings")

    st.markdown("### Configuration Status")

    status = validate_all_settings()

    sections = [
        ("Database", "database"),
        ("Reminders", "reminders"),
        ("Application", "app"),
    ]

    for name, key in sections:
        if status.get(key, False):
            st.success(f"✅ {name} - OK")
        else:
            error = status.get(f"{key}_error", "Not configured")
            st.error(f"❌ {name} - {error}")

    settings = get_settings()
    st.markdown(f"**Database file:** `{settings.database.path}`")
    scheduler = tracker.scheduler
    if scheduler and scheduler.is_running:
        st.markdown(f"**Reminder check:** every {scheduler.interval / 3600:g} hours")
    else:
        st.markdown("**Reminder check:** disabled")

    st.markdown("---")
    st.markdown("### Recent Activity")
    events = tracker.audit_logger.recent_events(limit=20)
    if events:
        st.dataframe(
            pd.DataFrame([
                {
                    "Time": event.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                    "Event": event.event_type.value,
                    "Description": event.description,
                }
                for event in events
            ]),
            use_container_width=True,
            hide_index=True,
        )
    else:
        st.info("No activity yet.")

    st.markdown("---")
    st.markdown("### Configuration")
    st.markdown(
        "To configure the application, create a `.env` file. "
        "See `.env.example` for the available variables."
    )


if __name__ == "__main__":
    main()
