"""
Streamlit Frontend for Daybook

Three pages reachable from the home menu:
- Planilha de Horários (timesheet)
- Gastos (daily expenses)
- Anotações (notes)

DESIGN PRINCIPLES:
1. Simple, mobile-sized layout
2. Every save gives visible feedback (toast)
3. Deleting asks for confirmation first
4. Storage problems show a toast, never a crash

Page controllers are rebuilt whenever the user navigates to another
page, so each page activation reloads its data from durable storage.
"""

from datetime import date

import pandas as pd
import plotly.express as px
import streamlit as st

from daybook.calendar import (
    GRID_HEADER,
    date_key,
    format_day,
    month_title,
    weekday_label,
)
from daybook.config import DEFAULT_ARRIVAL, get_settings
from daybook.models import Expense
from daybook.notifications import ToastKind
from daybook.orchestrator import (
    AppComponents,
    EntryValidationError,
    ExpensesController,
    NotesController,
    TimesheetController,
    create_app_components,
)
from daybook.services.storage import MemoryStorage
from daybook.stats import WeekStats


PAGES = ["🏠 Início", "🕒 Planilha Horários", "💲 Gastos", "📝 Anotações"]


# Page configuration
st.set_page_config(
    page_title="SIT",
    page_icon="📒",
    layout="centered",
    initial_sidebar_state="expanded",
)

# Custom CSS for better UX
st.markdown("""
<style>
    .stButton>button {
        width: 100%;
    }
    .total-box {
        padding: 20px;
        background-color: #f3e8ff;
        border-radius: 10px;
        text-align: center;
        font-size: 1.3em;
        font-weight: bold;
        margin: 10px 0;
    }
</style>
""", unsafe_allow_html=True)


def get_session_storage() -> MemoryStorage:
    """Session-scoped mirror; dies with the browser session."""
    if "session_storage" not in st.session_state:
        settings = get_settings().storage
        st.session_state.session_storage = MemoryStorage(quota_bytes=settings.quota_bytes)
    return st.session_state.session_storage


def activate(page: str) -> AppComponents:
    """Rebuild the controllers when the active page changes."""
    if st.session_state.get("active_page") != page or "components" not in st.session_state:
        st.session_state.components = create_app_components(
            session_storage=get_session_storage(),
        )
        st.session_state.active_page = page
        st.session_state.confirm_delete = None
    return st.session_state.components


def render_toast(components: AppComponents) -> None:
    toast = components.notifier.take_unrendered()
    if toast is not None:
        icon = "✅" if toast.kind == ToastKind.SUCCESS else "❌"
        st.toast(toast.message, icon=icon)


def main():
    """Main application entry point."""
    st.sidebar.title("📒 SIT")
    st.sidebar.caption("Tá tudo aqui, ó")
    st.sidebar.markdown("---")

    page = st.sidebar.radio("Ir para:", PAGES, index=0)
    components = activate(page)

    if page == PAGES[1]:
        render_timesheet_page(components.timesheet)
    elif page == PAGES[2]:
        render_expenses_page(components.expenses)
    elif page == PAGES[3]:
        render_notes_page(components.notes)
    else:
        render_home_page()

    render_toast(components)


def render_home_page():
    st.title("SIT")
    st.markdown("Tá tudo aqui, ó")
    st.markdown("---")
    st.markdown(
        """
        - **🕒 Planilha Horários**: horário de chegada e saída de cada dia
        - **💲 Gastos**: gastos do dia, com totais da semana
        - **📝 Anotações**: anotações livres
        """
    )
    st.info("Use o menu ao lado para abrir uma página.")


# =============================================================================
# CALENDAR + CHARTS (shared by the weekly pages)
# =============================================================================

def render_month_calendar(controller, page_key: str) -> None:
    """Month grid; clicking a day selects its week."""
    st.subheader(month_title(controller.current_date).capitalize())

    header = st.columns(7)
    for col, label in zip(header, GRID_HEADER):
        col.markdown(f"**{label}**")

    for row_index, row in enumerate(controller.month_rows()):
        cols = st.columns(7)
        for col, day in zip(cols, row):
            if day is None:
                continue
            selected = controller.is_selected(day)
            if col.button(
                str(day.day),
                key=f"{page_key}_cal_{row_index}_{date_key(day)}",
                type="primary" if selected else "secondary",
            ):
                controller.select_date(day)
                st.rerun()


def render_week_charts(stats: WeekStats, value_label: str, title: str) -> None:
    rows = pd.DataFrame(stats.as_rows())
    color_map = {p.label: p.color for p in stats.points}

    col1, col2 = st.columns(2)
    with col1:
        fig_pie = px.pie(
            rows,
            values="value",
            names="label",
            color="label",
            color_discrete_map=color_map,
            title="Distribuição",
        )
        st.plotly_chart(fig_pie, use_container_width=True)
    with col2:
        fig_bar = px.bar(
            rows,
            x="label",
            y="value",
            color="label",
            color_discrete_map=color_map,
            labels={"label": "Dia", "value": value_label},
            title=title,
        )
        fig_bar.update_layout(showlegend=False)
        st.plotly_chart(fig_bar, use_container_width=True)


# =============================================================================
# TIMESHEET
# =============================================================================

def render_timesheet_page(controller: TimesheetController):
    st.title("🕒 Planilha de Horários")
    render_month_calendar(controller, "ts")

    if not controller.selected_week:
        st.info("Toque em um dia para ver a semana.")
        return

    for day in controller.selected_week:
        render_time_entry(controller, day)

    stats = controller.week_stats()
    if not stats.is_empty:
        st.markdown("## Estatísticas")
        render_week_charts(stats, "Horas", "Horas por Dia")
        st.markdown(
            f'<div class="total-box">Esta semana você trabalhou {stats.total:.2f} horas</div>',
            unsafe_allow_html=True,
        )


def render_time_entry(controller: TimesheetController, day: date) -> None:
    key = date_key(day)
    entry = controller.entry(day)

    with st.container(border=True):
        head, edit_col = st.columns([4, 1])
        head.markdown(f"**{weekday_label(day)} - {format_day(day)}**")
        if edit_col.button("✏️", key=f"ts_edit_{key}"):
            controller.toggle_day(day)
            st.rerun()

        if not controller.is_open(day):
            if entry is not None:
                st.markdown(f"Chegada: {entry.effective_arrival}  \nSaída: {entry.departure}")
                if entry.notes:
                    st.caption(entry.notes)
            return

        arrival = st.text_input(
            f"Hora de Chegada (padrão {DEFAULT_ARRIVAL})",
            value=entry.effective_arrival if entry else DEFAULT_ARRIVAL,
            key=f"ts_arrival_{key}",
        )
        departure = st.text_input(
            "Hora de Saída *",
            value=entry.departure if entry else "",
            placeholder="17:00",
            key=f"ts_departure_{key}",
        )
        notes = st.text_area(
            "Anotações (opcional)",
            value=(entry.notes or "") if entry else "",
            key=f"ts_notes_{key}",
        )

        col1, col2 = st.columns(2)
        if col1.button("Salvar", key=f"ts_save_{key}", type="primary"):
            try:
                controller.save_entry(day, arrival, departure, notes)
                st.rerun()
            except EntryValidationError as e:
                st.error(str(e))
        if entry is not None and col2.button("Excluir", key=f"ts_delete_{key}"):
            st.session_state.confirm_delete = key
        if st.session_state.get("confirm_delete") == key:
            st.warning("Tem certeza que quer excluir este dia?")
            if st.button("Confirmar exclusão", key=f"ts_confirm_{key}"):
                controller.delete_entry(day, confirmed=True)
                st.session_state.confirm_delete = None
                st.rerun()


# =============================================================================
# EXPENSES
# =============================================================================

def render_expenses_page(controller: ExpensesController):
    currency = get_settings().app.currency_symbol
    st.title("💲 Controle de Gastos")
    render_month_calendar(controller, "exp")

    if not controller.selected_week:
        st.info("Toque em um dia para ver a semana.")
        return

    for day in controller.selected_week:
        render_day_expenses(controller, day, currency)

    stats = controller.week_stats()
    if not stats.is_empty:
        st.markdown("## Estatísticas")
        render_week_charts(stats, currency, "Gastos por Dia")
        st.markdown(
            f'<div class="total-box">Esta semana você gastou {currency} {stats.total:.2f}</div>',
            unsafe_allow_html=True,
        )


def _draft_expenses(key: str, record) -> list[Expense]:
    """Editable lines for a day, kept across reruns."""
    draft_key = f"exp_draft_{key}"
    if draft_key not in st.session_state:
        if record is not None and record.expenses:
            st.session_state[draft_key] = list(record.expenses)
        else:
            st.session_state[draft_key] = [Expense.new()]
    return st.session_state[draft_key]


def render_day_expenses(controller: ExpensesController, day: date, currency: str) -> None:
    key = date_key(day)
    record = controller.day_record(day)

    with st.container(border=True):
        head, toggle_col = st.columns([4, 1])
        head.markdown(f"**{weekday_label(day)} - {format_day(day)}**")
        if toggle_col.button("➕", key=f"exp_toggle_{key}"):
            st.session_state.pop(f"exp_draft_{key}", None)
            controller.toggle_day(day)
            st.rerun()

        if not controller.is_open(day):
            if record is not None:
                for expense in record.expenses:
                    st.markdown(
                        f"{expense.description or 'Sem descrição'}: "
                        f"**{currency} {expense.parsed_amount():.2f}**"
                    )
                st.markdown(f"**Total: {currency} {record.total():.2f}**")
                if record.notes:
                    st.caption(record.notes)
            return

        draft = _draft_expenses(key, record)
        edited = []
        for index, expense in enumerate(draft):
            st.markdown(f"Gasto {index + 1}")
            amount = st.text_input(
                f"Valor ({currency}) *",
                value=expense.amount,
                placeholder="0.00",
                key=f"exp_amount_{expense.id}",
            )
            description = st.text_input(
                "Descrição",
                value=expense.description,
                placeholder="Ex: Almoço, Transporte...",
                key=f"exp_desc_{expense.id}",
            )
            edited.append(Expense(id=expense.id, amount=amount, description=description))
            if len(draft) > 1 and st.button("🗑️ Remover", key=f"exp_remove_{expense.id}"):
                st.session_state[f"exp_draft_{key}"] = [e for e in edited if e.id != expense.id] + draft[index + 1:]
                st.rerun()

        if st.button("Adicionar Gasto", key=f"exp_add_{key}"):
            st.session_state[f"exp_draft_{key}"] = edited + [Expense.new()]
            st.rerun()

        notes = st.text_area(
            "Anotações Gerais (opcional)",
            value=(record.notes or "") if record else "",
            placeholder="Anotações sobre os gastos do dia...",
            key=f"exp_notes_{key}",
        )

        if st.button("Salvar Tudo", key=f"exp_save_{key}", type="primary"):
            try:
                controller.save_day(day, edited, notes)
                st.session_state.pop(f"exp_draft_{key}", None)
                st.rerun()
            except EntryValidationError as e:
                st.error(str(e))

        if record is not None:
            if st.button("Excluir dia", key=f"exp_delete_{key}"):
                st.session_state.confirm_delete = key
            if st.session_state.get("confirm_delete") == key:
                st.warning("Tem certeza que quer excluir os gastos deste dia?")
                if st.button("Confirmar exclusão", key=f"exp_confirm_{key}"):
                    controller.delete_day(day, confirmed=True)
                    controller.close_day(day)
                    st.session_state.confirm_delete = None
                    st.rerun()


# =============================================================================
# NOTES
# =============================================================================

def render_notes_page(controller: NotesController):
    title_col, add_col = st.columns([3, 1])
    title_col.title("📝 Minhas Anotações")
    if add_col.button("➕ Nova", type="primary"):
        controller.add_note()
        st.rerun()

    notes = controller.notes()
    if not notes:
        st.markdown("### 📝")
        st.info('Nenhuma anotação ainda. Clique em "Nova" para começar!')
        return

    for note in notes:
        with st.container(border=True):
            editing = controller.editing_id == note.id
            head, edit_col, delete_col = st.columns([4, 1, 1])

            if editing:
                head.text_input(
                    "Título",
                    value=note.title,
                    key=f"note_title_{note.id}",
                    on_change=_on_note_field_change,
                    args=(controller, note.id, "title"),
                )
            else:
                head.markdown(f"**{note.display_title}**")

            if edit_col.button("💾" if editing else "✏️", key=f"note_edit_{note.id}"):
                controller.toggle_edit(note.id)
                st.rerun()
            if delete_col.button("🗑️", key=f"note_delete_{note.id}"):
                st.session_state.confirm_delete = note.id

            if editing:
                st.text_area(
                    "Conteúdo",
                    value=note.content,
                    key=f"note_content_{note.id}",
                    on_change=_on_note_field_change,
                    args=(controller, note.id, "content"),
                )
            elif note.content:
                st.markdown(note.content)

            st.caption(f"Atualizado em {note.updated_at.astimezone():%d/%m/%Y %H:%M}")

            if st.session_state.get("confirm_delete") == note.id:
                st.warning("Tem certeza que quer deletar esta anotação?")
                if st.button("Confirmar", key=f"note_confirm_{note.id}"):
                    controller.delete_note(note.id, confirmed=True)
                    st.session_state.confirm_delete = None
                    st.rerun()

    st.caption(controller.count_label())


def _on_note_field_change(controller: NotesController, note_id: str, field: str) -> None:
    value = st.session_state[f"note_{field}_{note_id}"]
    controller.update_note(note_id, **{field: value})


if __name__ == "__main__":
    main()
