# CABINET STATISTICS - Streamlit Dashboard (Revenue + Balance + Deals per cabinet)
# Single-page layout with three tabs: summary cards & charts, cabinet entry with inline edit/delete,
# and a detailed per-cabinet view. Records live in the browser session only; export to Excel/CSV + PDF.
#
# Run locally:  python -m streamlit run app.py

from datetime import date
from typing import Dict, List

import matplotlib.pyplot as plt
import pandas as pd
import streamlit as st

from cabinet_stats.aggregate import deals_chart_frame, financial_chart_frame, summarize
from cabinet_stats.charts import deals_split_figure
from cabinet_stats.config import load_settings_json
from cabinet_stats.export import (
    EXPORT_FORMATS,
    ExportError,
    export_bytes,
    export_filename,
    format_money,
    pdf_summary_bytes,
)
from cabinet_stats.log import configure_logging, get_logger
from cabinet_stats.models import COUNT_FIELDS, MONEY_FIELDS, TEXT_FIELDS, CabinetRecord, seed_records
from cabinet_stats.reconcile import previous_total
from cabinet_stats.sample import generate_sample_records
from cabinet_stats.store import CabinetStore
from cabinet_stats.validation import FIELD_LABELS, ValidationError, validate_fields

st.set_page_config(page_title="Cabinet Statistics", layout="wide", page_icon="📊")

log = get_logger("cabinet_stats.app")

# ---------- THEME ----------
THEME_CSS = """
<style>
:root { --bg:#121212; --panel:#1a1a1a; --input:#232323; --border:#333333;
        --primary:#9b87f5; --accent:#D6BCFA; --text:#f1f5f9; --muted:#a3a3a3; }
header, .stApp { background: var(--bg) !important; color: var(--text) !important; }
.block-container { padding-top: 1rem; }
h1,h2,h3,h4,h5 { color: var(--accent) !important; }
.stButton>button, .stDownloadButton>button { background: linear-gradient(90deg,var(--primary),#7E69AB) !important;
  border:0 !important; color:#fff !important; font-weight:600 !important; border-radius:10px !important; }
div[data-testid="stMetric"] { background: var(--panel) !important; padding:14px !important; border-radius:12px !important;
  border:1px solid rgba(255,255,255,.08) !important; }
div[data-testid="stMetricLabel"] { color: var(--muted) !important; }
.stTextInput>div>div>input { background: var(--input) !important; color: var(--text) !important;
  border:1px solid var(--border) !important; border-radius:8px !important; }
</style>
"""
st.markdown(THEME_CSS, unsafe_allow_html=True)

# form field order, label shown to the user
FORM_FIELDS = [
    ("last_name", "Last name"),
    ("first_name", "First name"),
    ("cabinet_label", "Cabinet"),
    ("total_revenue", "Cabinet revenue"),
    ("balance", "Balance"),
    ("deals_before_midnight", "Deals before cutoff"),
    ("deals_after_midnight", "Deals after cutoff"),
]
EDIT_COLS = ["id", "date"] + TEXT_FIELDS + MONEY_FIELDS + COUNT_FIELDS


def init_state():
    if "config" not in st.session_state:
        st.session_state.config = load_settings_json()
    if "store" not in st.session_state:
        st.session_state.store = CabinetStore(
            seed_records(date.today()), baseline=st.session_state.config["reconcile_baseline"]
        )


def money(x: float) -> str:
    return format_money(x, st.session_state.config["currency"])


# ---------- SIDEBAR ----------
def sidebar(cfg: dict, store: CabinetStore):
    with st.sidebar:
        st.markdown("## ⚙️ Data & Export")
        st.caption(f"Daily revenue baseline: **{cfg['reconcile_baseline']}** matching cabinet entry")

        formats = list(EXPORT_FORMATS)
        fmt = st.selectbox("Export format", formats, index=formats.index(cfg["export_format"]), key="export_fmt")
        try:
            data = export_bytes(store.list(), fmt)
        except ExportError as e:
            st.error(f"Export failed: {e}")
        else:
            st.download_button(
                "⬇️ Export statistics", data,
                file_name=export_filename(date.today(), fmt),
                mime=EXPORT_FORMATS[fmt], key="dl_export")

        try:
            pdf = pdf_summary_bytes(summarize(store.list()), cfg["brand"], cfg["currency"])
        except ExportError as e:
            st.error(f"PDF summary failed: {e}")
        else:
            st.download_button(
                "⬇️ Download PDF (Summary)", pdf,
                file_name=export_filename(date.today(), "pdf"),
                mime="application/pdf", key="dl_pdf")

        st.divider()
        if st.button("🧪 Load Sample Data", key="btn_sample"):
            store.replace_all(generate_sample_records(
                days=int(cfg["sample_days"]), seed=int(cfg["sample_seed"]),
                today=date.today(), baseline=cfg["reconcile_baseline"]))
            st.success("Sample data loaded")
            st.rerun()
        if st.button("↩️ Reset to starting cabinets", key="btn_reset"):
            store.replace_all(seed_records(date.today()))
            st.success("Reset done")
            st.rerun()


# ---------- DASHBOARD ----------
def dashboard_tab(cfg: dict, records: List[CabinetRecord]):
    s = summarize(records)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Total revenue", money(s.total_revenue), help=f"Across {s.record_count} cabinet records")
    c2.metric("Average daily revenue", money(s.average_daily_revenue))
    c3.metric("Total balance", money(s.total_balance), help="On all accounts")
    c4.metric("Total deals", s.total_deals, help="Current period")

    if not records:
        st.info("No cabinets yet. Add one in the Cabinets tab.")
        return

    left, right = st.columns(2)
    with left:
        st.subheader("📊 Financials")
        st.caption("Revenue, balance and daily revenue per cabinet")
        st.bar_chart(financial_chart_frame(records))
    with right:
        st.subheader("📈 Deal distribution")
        st.caption(f"Deals before and after {cfg['cutoff_label']}")
        st.line_chart(deals_chart_frame(records))

    with st.expander("🥧 Deals split (all cabinets)", expanded=False):
        fig = deals_split_figure(records, cfg["cutoff_label"])
        if fig is None:
            st.info("No deals recorded.")
        else:
            st.pyplot(fig)
            plt.close(fig)


# ---------- CABINETS ----------
def add_cabinet_form(cfg: dict, store: CabinetStore):
    st.subheader("➕ Add cabinet")
    # widget keys can only be reset before the widgets are drawn
    if st.session_state.pop("add_reset", False):
        for name, _ in FORM_FIELDS:
            st.session_state[f"add_{name}"] = ""
    flash = st.session_state.pop("add_flash", None)
    if flash:
        st.success(flash)
    # kept filled on rejection so the bad field can be corrected
    with st.form("add_cabinet", clear_on_submit=False):
        raw: Dict[str, str] = {}
        cols = st.columns(2)
        for i, (name, label) in enumerate(FORM_FIELDS):
            if name in COUNT_FIELDS:
                label = label.replace("cutoff", cfg["cutoff_label"])
            elif name in MONEY_FIELDS:
                label = f"{label} ({cfg['currency']})"
            raw[name] = cols[i % 2].text_input(label, key=f"add_{name}")
        submitted = st.form_submit_button("➕ Add")
    if submitted:
        try:
            rec = store.create(raw, today=date.today())
        except ValidationError as e:
            log.warning("entry rejected", extra={"field": e.field})
            st.error(f"Not added. {e}")
        else:
            st.session_state.add_flash = f"Cabinet {rec.cabinet_label} added. Daily revenue: {money(rec.daily_revenue)}"
            st.session_state.add_reset = True
            st.rerun()

    records = store.list()
    labels = list(dict.fromkeys(r.cabinet_label for r in records))
    if labels:
        hints = [f"{lbl}: {money(previous_total(lbl, records, cfg['reconcile_baseline']))}" for lbl in labels]
        st.caption("Previous totals used as baseline • " + " | ".join(hints))


def _changed_fields(original: CabinetRecord, row: pd.Series) -> dict:
    changes = {}
    for col in EDIT_COLS[1:]:
        new = row[col]
        missing = not isinstance(new, str) and pd.isna(new)
        if col == "date" and not missing:
            new = pd.to_datetime(new).date()
        # blanks go through so validation can name the field
        if missing or new != getattr(original, col):
            changes[col] = new
    return changes


def cabinets_table(cfg: dict, store: CabinetStore):
    st.subheader("🗂️ Cabinets — edit & delete")
    records = store.list()
    if not records:
        st.info("No cabinets yet.")
        return

    view = pd.DataFrame([r.to_dict() for r in records])[EDIT_COLS]
    edited_view = st.data_editor(
        view,
        use_container_width=True,
        num_rows="fixed",
        column_config={
            "id": st.column_config.TextColumn(disabled=True, help="Record ID (read-only)"),
            "date": st.column_config.DateColumn(format="YYYY-MM-DD"),
            "last_name": st.column_config.TextColumn(FIELD_LABELS["last_name"]),
            "first_name": st.column_config.TextColumn(FIELD_LABELS["first_name"]),
            "cabinet_label": st.column_config.TextColumn(FIELD_LABELS["cabinet_label"]),
            "total_revenue": st.column_config.NumberColumn(FIELD_LABELS["total_revenue"], step=1000, min_value=0),
            "daily_revenue": st.column_config.NumberColumn(
                FIELD_LABELS["daily_revenue"], step=1000,
                help="Stored when the record was added; editing revenue does not recompute it"),
            "balance": st.column_config.NumberColumn(FIELD_LABELS["balance"], step=1000, min_value=0),
            "deals_before_midnight": st.column_config.NumberColumn(FIELD_LABELS["deals_before_midnight"], step=1, min_value=0),
            "deals_after_midnight": st.column_config.NumberColumn(FIELD_LABELS["deals_after_midnight"], step=1, min_value=0),
        },
        key="cabinet_editor",
    )

    if st.button("💾 Save changes", key="btn_save_edits"):
        by_id = {r.id: r for r in records}
        pending = []
        try:
            for _, row in edited_view.iterrows():
                original = by_id.get(str(row["id"]))
                if original is None:
                    continue
                changes = _changed_fields(original, row)
                if changes:
                    pending.append((original.id, validate_fields(changes)))
        except ValidationError as e:
            log.warning("edit rejected", extra={"field": e.field})
            st.error(f"Changes not saved. {e}")
        else:
            for record_id, fields in pending:
                store.update(record_id, fields)
            st.success(f"Saved {len(pending)} change(s).")
            st.rerun()

    label_df = view.copy()
    label_df["label"] = (
        label_df["cabinet_label"].astype(str) + " | " + label_df["last_name"].astype(str) + " " +
        label_df["first_name"].astype(str) + " | " + label_df["date"].astype(str) +
        " | ID:" + label_df["id"].str[-6:]
    )
    del_choices = {row["label"]: row["id"] for _, row in label_df.iterrows()}

    dcol1, dcol2 = st.columns([3, 1])
    with dcol1:
        to_delete = st.multiselect("Select cabinet(s) to delete", options=list(del_choices.keys()), key="del_multisel")
        confirm = st.checkbox("I understand the selected cabinets will be removed for good", key="del_confirm")
    with dcol2:
        st.write("")
        delete_click = st.button("🗑️ Delete selected", use_container_width=True, key="btn_delete")

    if delete_click:
        if not to_delete:
            st.warning("No rows selected.")
        elif not confirm:
            st.warning("Tick the confirmation box first.")
        else:
            removed = sum(store.remove(del_choices[label]) for label in to_delete if label in del_choices)
            st.success(f"Deleted {removed} cabinet(s).")
            st.rerun()


# ---------- STATISTICS ----------
def statistics_tab(cfg: dict, records: List[CabinetRecord]):
    st.subheader("🔎 Detailed statistics")
    st.caption("Full information for every cabinet record")
    if not records:
        st.info("No cabinets yet.")
        return
    for r in records:
        with st.container(border=True):
            h1, h2 = st.columns([4, 1])
            h1.markdown(f"**{r.cabinet_label}** — {r.last_name} {r.first_name}")
            h2.caption(r.date.isoformat())
            m1, m2, m3, m4 = st.columns(4)
            m1.metric("Total revenue", money(r.total_revenue))
            m2.metric("Daily revenue", money(r.daily_revenue))
            m3.metric("Bank balance", money(r.balance))
            m4.metric("Deals", r.total_deals)
            st.caption(
                f"🕛 Before {cfg['cutoff_label']}: {r.deals_before_midnight}   •   "
                f"🌙 After {cfg['cutoff_label']}: {r.deals_after_midnight}"
            )


# ---------- MAIN ----------
init_state()
cfg = st.session_state.config
configure_logging(cfg["log_level"], bool(cfg["json_logs"]))
store: CabinetStore = st.session_state.store

st.markdown(f"# 📊 {cfg['brand']}")
st.caption("Revenue, balance and deal tracking per cabinet")

sidebar(cfg, store)

tab_dash, tab_cab, tab_stats = st.tabs(["📊 Dashboard", "🗂️ Cabinets", "📈 Statistics"])
with tab_dash:
    dashboard_tab(cfg, store.list())
with tab_cab:
    add_cabinet_form(cfg, store)
    st.divider()
    cabinets_table(cfg, store)
with tab_stats:
    statistics_tab(cfg, store.list())

st.markdown("---")
st.markdown("**Notes**: Daily revenue is a snapshot taken when a cabinet record is added: "
            "the new total minus the previous total recorded for the same cabinet. "
            "Editing a record later does not recompute it. Data is kept for this browser session only.")
