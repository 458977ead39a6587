"""
Streamlit UI for the Profit Calculator.

Features:
- Editable item grid (raw fields editable, calculated fields read-only)
- Add/delete items, sort by profit
- Total profit summary
- Save/load the working set as a JSON state file
- Export to CSV/Excel
"""
import streamlit as st
import pandas as pd
import sys
from pathlib import Path
from datetime import datetime

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from profit_calculator.config.settings import get_settings, configure_logging
from profit_calculator.engine.models import RAW_FIELDS, DERIVED_FIELDS, FIELD_LABELS
from profit_calculator.services.workbook import Workbook


# Grid columns, in display order
TABLE_COLUMNS = [
    'item_name', 'quantity', 'cost', 'selling_price', 'profit',
    'selling_price_per_metre', 'final_cost', 'discount', 'gst', 'expense',
]
CURRENCY_COLUMNS = {'cost', 'selling_price', 'profit', 'expense', 'final_cost'}


st.set_page_config(
    page_title="Profitability Calculator",
    layout="wide",
    initial_sidebar_state="collapsed"
)


@st.cache_resource
def get_settings_cached():
    """Get cached settings."""
    configure_logging()
    return get_settings()


settings = get_settings_cached()

if 'workbook' not in st.session_state:
    st.session_state.workbook = Workbook(settings=settings)
    st.session_state.editor_version = 0
    st.session_state.upload_version = 0
    st.session_state.flash = None

workbook: Workbook = st.session_state.workbook


def refresh_grid():
    """Drop pending grid edits so the editor redraws from the workbook."""
    st.session_state.editor_version += 1
    st.rerun()


# ============================================================================
# CUSTOM CSS & STYLING
# ============================================================================
st.markdown("""
    <style>
        .block-container {
            padding-top: 2rem;
            padding-bottom: 2rem;
        }
        h1 {
            font-family: 'Helvetica Neue', Helvetica, Arial, sans-serif;
            font-weight: 700;
            text-align: center;
        }
        .stMetric {
            background-color: #f0f2f6;
            padding: 10px;
            border-radius: 5px;
        }
    </style>
""", unsafe_allow_html=True)


st.title("Profitability Calculator")
st.caption(f"Manage pricing and profits for multiple items in bulk. | {datetime.now().strftime('%Y-%m-%d')}")

if st.session_state.flash:
    level, message = st.session_state.flash
    getattr(st, level)(message)
    st.session_state.flash = None


# ============================================================================
# ACTIONS: Add / Save / Export / Load
# ============================================================================
c1, c2, c3, c4, c5 = st.columns([1, 1, 1, 1, 2])

with c1:
    if st.button("➕ Add Item", type="primary", use_container_width=True):
        workbook.add_item()
        refresh_grid()

with c2:
    if len(workbook) > 0:
        st.download_button(
            "💾 Save",
            data=workbook.export_state(),
            file_name=settings.state_filename,
            mime="application/json",
            use_container_width=True
        )
    elif st.button("💾 Save", use_container_width=True):
        st.error("There is no data to save.")

with c3:
    if len(workbook) > 0:
        st.download_button(
            "📥 CSV",
            data=workbook.export_table('csv'),
            file_name=f"{settings.table_filename}.csv",
            mime="text/csv",
            use_container_width=True
        )

with c4:
    if len(workbook) > 0:
        st.download_button(
            "📊 Excel",
            data=workbook.export_table('xlsx'),
            file_name=f"{settings.table_filename}.xlsx",
            mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            use_container_width=True
        )

with c5:
    uploaded = st.file_uploader(
        "📂 Load",
        type=["json"],
        key=f"state_upload_{st.session_state.upload_version}",
        label_visibility="collapsed"
    )
    if uploaded is not None:
        result = workbook.import_state(uploaded.getvalue())
        # Reset the uploader so the same file can be loaded again
        st.session_state.upload_version += 1
        if result.valid:
            message = f"Loaded {len(result.rows)} items from {uploaded.name}"
            if result.warnings:
                message += f" ({len(result.warnings)} warnings)"
            st.session_state.flash = ("success", message)
            refresh_grid()
        else:
            st.error(f"Error loading state: {result.message}")


# ============================================================================
# ITEM GRID
# ============================================================================
direction = workbook.sort_direction
if st.button(f"Sort by Profit {direction.arrow}", help="Cycle: none → descending → ascending"):
    workbook.toggle_sort()
    refresh_grid()

view_rows = workbook.view()

if view_rows:
    table = pd.DataFrame(
        [{**{name: getattr(row, name) for name in TABLE_COLUMNS}, 'delete': False} for row in view_rows],
        index=[row.id for row in view_rows],
    )

    column_config = {}
    for name in TABLE_COLUMNS:
        label = FIELD_LABELS[name]
        if name in CURRENCY_COLUMNS:
            label = f"{label} ({settings.currency_symbol})"
        column_config[name] = st.column_config.TextColumn(label, disabled=name in DERIVED_FIELDS)
    column_config['delete'] = st.column_config.CheckboxColumn("🗑️", help="Delete item")

    edited = st.data_editor(
        table,
        use_container_width=True,
        num_rows="fixed",
        hide_index=True,
        column_config=column_config,
        key=f"items_editor_{st.session_state.editor_version}"
    )

    changed = False
    for item_id, edited_row in edited.iterrows():
        if edited_row['delete']:
            workbook.delete_item(item_id)
            changed = True
            continue
        original = table.loc[item_id]
        for name in RAW_FIELDS:
            if edited_row[name] != original[name]:
                workbook.update_item(item_id, name, edited_row[name])
                changed = True

    if changed:
        refresh_grid()

    # Detailed Breakdown
    with st.expander("📊 View Detailed Cost Breakdown"):
        breakdown = pd.DataFrame([
            {FIELD_LABELS[name]: getattr(row, name) for name in ('item_name',) + DERIVED_FIELDS}
            for row in view_rows
        ])
        st.dataframe(breakdown, use_container_width=True, hide_index=True)
else:
    st.info("No items to display. Add an item or load a state file to get started.")


# ============================================================================
# TOTAL PROFIT
# ============================================================================
st.divider()
summary = workbook.summary()

with st.container(border=True):
    st.subheader("Total Profit")
    st.caption("Sum of profits from all items.")
    colour = "green" if summary.is_profitable else "red"
    st.markdown(f"## :{colour}[{settings.currency_symbol}{summary.total_profit:,.2f}]")

    m1, m2, m3 = st.columns(3)
    m1.metric("Items", summary.item_count)
    m2.metric("Profitable", summary.profitable_count)
    m3.metric("Total Final Cost", f"{settings.currency_symbol}{summary.total_final_cost:,.2f}")
