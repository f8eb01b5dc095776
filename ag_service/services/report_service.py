# ag_service/services/report_service.py
"""
Attendance spreadsheets.

``generate_ag_report`` is a pure transformation from a report input to an
in-memory .xlsx workbook; it never touches the database. The full assembly
export (``generate_assembly_report``) reads everything an assembly owns.
"""
import logging
import re
from datetime import datetime
from io import BytesIO
from typing import Dict, Iterable, List, Optional, Union
from zoneinfo import ZoneInfo

import pandas as pd
from sqlalchemy.orm import Session

from ag_service import crud
from ag_service.constants import AttendanceState, CommitteeStatus, ParticipantType
from ag_service.core.config import settings
from ag_service.core.exceptions import NotFoundError, ReportGenerationError
from ag_service.schemas.report import (
    AGReportResult,
    AvulsaReportInput,
    ReportRow,
    SessionReportInput,
)
from ag_service.utils.time import as_utc, utcnow

logger = logging.getLogger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

SHEET_EBS = "Diretoria Executiva"
SHEET_CRS = "Coordenadores Regionais"
SHEET_PLENOS = "Comitês Plenos"
SHEET_NAO_PLENOS = "Comitês Não-Plenos"
SHEET_PARTICIPANTS = "Participantes da Sessão"

OFFICER_COLUMNS = ["Tipo", "Nome", "Cargo", "Status"]
COMMITTEE_COLUMNS = ["Tipo", "Nome", "Escola", "Regional", "Localização", "Status"]
PARTICIPANT_COLUMNS = [
    "Nome",
    "Cargo/Função",
    "Comitê/Instituição",
    "ID",
    "Status",
    "Última Atualização",
]

STATUS_LABELS = {
    AttendanceState.PRESENT.value: "Presente",
    AttendanceState.ABSENT.value: "Ausente",
    AttendanceState.EXCLUDED.value: "Excluído do quórum",
}
NOT_COUNTING_LABEL = "Não contabilizado"

INDIVIDUAL_TYPES = {ParticipantType.INDIVIDUAL.value, ParticipantType.USER.value}


def status_label(attendance: Optional[str]) -> str:
    return STATUS_LABELS.get(attendance, NOT_COUNTING_LABEL)


def _safe_name(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9]", "_", name)


def _filename(prefix: str, name: Optional[str]) -> str:
    today = utcnow().date().isoformat()
    if name:
        return f"{prefix}-{_safe_name(name)}-{today}.xlsx"
    return f"{prefix}-{today}.xlsx"


def _local_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return "-"
    local = as_utc(value).astimezone(ZoneInfo(settings.REPORT_TIMEZONE))
    return local.strftime("%d/%m/%Y, %H:%M:%S")


def _local_date(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return as_utc(value).astimezone(ZoneInfo(settings.REPORT_TIMEZONE)).strftime("%d/%m/%Y")


# ---- Row formatting ---- #


def _officer_row(row: ReportRow, label: str) -> dict:
    return {
        "Tipo": label,
        "Nome": row.participant_name or "N/A",
        "Cargo": row.participant_role or "N/A",
        "Status": status_label(row.attendance),
    }


def _committee_row(row: ReportRow, standing: CommitteeStatus) -> dict:
    return {
        "Tipo": "Comitê Pleno" if standing == CommitteeStatus.PLENO else "Comitê Não-Pleno",
        "Nome": row.participant_name or "N/A",
        "Escola": row.escola or "N/A",
        "Regional": row.regional or "N/A",
        "Localização": f"{row.cidade or 'N/A'}, {row.uf or 'N/A'}",
        "Status": status_label(row.attendance),
    }


def _participant_row(row: ReportRow) -> dict:
    return {
        "Nome": row.participant_name or "N/A",
        "Cargo/Função": row.participant_role or "Participante",
        "Comitê/Instituição": row.comite_local or "-",
        "ID": row.participant_id or "-",
        "Status": status_label(row.attendance),
        "Última Atualização": _local_timestamp(row.last_updated or row.marked_at),
    }


def _write_workbook(sheets: Dict[str, tuple[List[dict], List[str]]]) -> BytesIO:
    output = BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        for title, (rows, columns) in sheets.items():
            pd.DataFrame(rows, columns=columns).to_excel(writer, sheet_name=title, index=False)
    output.seek(0)
    return output


# ---- Bucketing ---- #


def _split_committees(
    committees: Iterable[ReportRow], roster: Optional[Dict[str, Optional[str]]]
) -> tuple[List[dict], List[dict]]:
    """
    Sort committee rows into Pleno / Não-pleno.

    With a roster the roster's standing wins over the row's own snapshot,
    which can be stale. A committee missing from the roster is Não-pleno.
    """
    plenos, nao_plenos = [], []
    for row in committees:
        if roster is not None:
            standing = CommitteeStatus.normalize(roster.get(row.participant_id))
        else:
            standing = CommitteeStatus.normalize(row.participant_status)
        target = plenos if standing == CommitteeStatus.PLENO else nao_plenos
        target.append(_committee_row(row, standing))
    return plenos, nao_plenos


def _standard_result(
    *,
    ebs: List[dict],
    crs: List[dict],
    plenos: List[dict],
    nao_plenos: List[dict],
    type_label: str,
    name: Optional[str],
    extra_participants: Optional[List[dict]] = None,
) -> AGReportResult:
    sheets = {
        SHEET_EBS: (ebs, OFFICER_COLUMNS),
        SHEET_CRS: (crs, OFFICER_COLUMNS),
        SHEET_PLENOS: (plenos, COMMITTEE_COLUMNS),
        SHEET_NAO_PLENOS: (nao_plenos, COMMITTEE_COLUMNS),
    }
    stats = {
        "ebs": len(ebs),
        "crs": len(crs),
        "comitesPlenos": len(plenos),
        "comitesNaoPlenos": len(nao_plenos),
        "total": len(ebs) + len(crs) + len(plenos) + len(nao_plenos),
        "type": type_label,
    }
    if extra_participants:
        sheets[SHEET_PARTICIPANTS] = (extra_participants, PARTICIPANT_COLUMNS)
        stats["participantes"] = len(extra_participants)
        stats["total"] += len(extra_participants)
    return AGReportResult(
        buffer=_write_workbook(sheets),
        filename=_filename("relatorio-presenca-ag", name),
        stats=stats,
    )


def _session_report(report: SessionReportInput) -> AGReportResult:
    ebs, crs, committees, individuals = [], [], [], []
    for row in report.records:
        if row.participant_type == ParticipantType.EB.value:
            ebs.append(row)
        elif row.participant_type == ParticipantType.CR.value:
            crs.append(row)
        elif row.participant_type in (ParticipantType.COMITE.value, "comite_local"):
            committees.append(row)
        elif row.participant_type in INDIVIDUAL_TYPES:
            individuals.append(row)

    if report.session_type == "sessao" and individuals:
        rows = [_participant_row(r) for r in individuals]
        return AGReportResult(
            buffer=_write_workbook({SHEET_PARTICIPANTS: (rows, PARTICIPANT_COLUMNS)}),
            filename=_filename("relatorio-presenca-sessao", report.session_name),
            stats={
                "present": sum(1 for r in individuals if r.attendance == AttendanceState.PRESENT.value),
                "total": len(individuals),
                "type": "sessao",
                "sessionName": report.session_name,
            },
        )

    roster = None
    if report.session_type == "plenaria" and report.committee_roster is not None:
        roster = {entry.participant_id: entry.status for entry in report.committee_roster}
    plenos, nao_plenos = _split_committees(committees, roster)

    kind = "Plenária" if report.session_type == "plenaria" else "Sessão"
    return _standard_result(
        ebs=[_officer_row(r, "EB") for r in ebs],
        crs=[_officer_row(r, "CR") for r in crs],
        plenos=plenos,
        nao_plenos=nao_plenos,
        type_label=f'{kind} "{report.session_name}"',
        name=report.session_name,
    )


def _avulsa_report(report: AvulsaReportInput) -> AGReportResult:
    return _standard_result(
        ebs=[_officer_row(r, "EB") for r in report.ebs],
        crs=[_officer_row(r, "CR") for r in report.crs],
        plenos=[_committee_row(r, CommitteeStatus.PLENO) for r in report.comites_plenos],
        nao_plenos=[_committee_row(r, CommitteeStatus.NAO_PLENO) for r in report.comites_nao_plenos],
        type_label="Chamada Avulsa",
        name=report.name,
        extra_participants=[_participant_row(r) for r in report.participantes],
    )


def generate_ag_report(report: Union[SessionReportInput, AvulsaReportInput]) -> AGReportResult:
    """
    Build the attendance workbook for a session snapshot or a roll call.

    Sheets are Diretoria Executiva, Coordenadores Regionais, Comitês Plenos
    and Comitês Não-Plenos, except for a sessão with individual rows, which
    gets a single "Participantes da Sessão" sheet.
    """
    try:
        if isinstance(report, AvulsaReportInput):
            result = _avulsa_report(report)
        else:
            result = _session_report(report)
    except Exception as e:
        logger.error(f"Failed to generate AG report: {e}", exc_info=True)
        raise ReportGenerationError(f"Failed to generate AG report: {e}") from e
    logger.info(f"Generated attendance report {result.filename} ({result.stats['total']} rows)")
    return result


# ---- Full assembly export ---- #


def _yes_no(value: Optional[bool]) -> str:
    return "Sim" if value else "Não"


def generate_assembly_report(db: Session, *, assembly_id: str) -> AGReportResult:
    """
    Export an assembly: its details, roster, registrations, modalities and
    the global registration settings, one sheet each. Empty collections
    are left out.
    """
    assembly = crud.assembly.get(db, assembly_id)
    if assembly is None:
        raise NotFoundError("Assembly", assembly_id)

    participants = crud.participant.get_by_assembly(db, assembly_id=assembly_id)
    registrations = crud.registration.get_by_assembly(db, assembly_id=assembly_id)
    modalities = crud.modality.get_by_assembly(db, assembly_id=assembly_id)
    config = crud.ag_config.get_current(db)

    sheets: Dict[str, tuple[List[dict], List[str]]] = {}
    info = [
        ("Nome", assembly.name),
        ("Tipo", assembly.type),
        ("Local", assembly.location),
        ("Data de Início", _local_date(assembly.start_date)),
        ("Data de Fim", _local_date(assembly.end_date)),
        ("Status", assembly.status),
        ("Inscrições Abertas", _yes_no(assembly.registration_open)),
        ("Máx. Participantes", assembly.max_participants or "Ilimitado"),
        ("Descrição", assembly.description or ""),
        ("Criada em", _local_date(assembly.created_at)),
        ("Última atualização", _local_date(assembly.last_updated)),
    ]
    sheets["Informações da AG"] = (
        [{"Campo": k, "Valor": v} for k, v in info],
        ["Campo", "Valor"],
    )

    if participants:
        sheets["Participantes"] = (
            [
                {
                    "ID": p.participant_id,
                    "Tipo": p.type,
                    "Nome": p.name,
                    "Função": p.role or "",
                    "Status": p.status or "",
                    "Escola": p.escola or "",
                    "Regional": p.regional or "",
                    "Cidade": p.cidade or "",
                    "UF": p.uf or "",
                    "AG Filiação": p.ag_filiacao or "",
                    "Criado em": _local_date(p.created_at),
                }
                for p in participants
            ],
            ["ID", "Tipo", "Nome", "Função", "Status", "Escola", "Regional", "Cidade", "UF",
             "AG Filiação", "Criado em"],
        )

    if registrations:
        modality_names = {m.id: m.name for m in modalities}
        sheets["Inscrições"] = (
            [
                {
                    "ID": r.participant_id,
                    "Nome": r.participant_name,
                    "Tipo": r.participant_type,
                    "Email": r.email or "",
                    "Status": r.status,
                    "Data de Inscrição": _local_date(r.registered_at),
                    "Modalidade": modality_names.get(r.modality_id, r.modality_id or ""),
                    "Escola": r.escola or "",
                    "Regional": r.regional or "",
                    "Cidade": r.cidade or "",
                    "UF": r.uf or "",
                    "Celular": r.celular or "",
                    "CPF": r.cpf or "",
                    "Data Nascimento": r.data_nascimento or "",
                    "Isento Pagamento": _yes_no(r.is_payment_exempt),
                    "Tem Comprovante": _yes_no(bool(r.receipt_storage_id)),
                    "Arquivo Comprovante": r.receipt_file_name or "",
                }
                for r in registrations
            ],
            ["ID", "Nome", "Tipo", "Email", "Status", "Data de Inscrição", "Modalidade",
             "Escola", "Regional", "Cidade", "UF", "Celular", "CPF", "Data Nascimento",
             "Isento Pagamento", "Tem Comprovante", "Arquivo Comprovante"],
        )

    if modalities:
        sheets["Modalidades"] = (
            [
                {
                    "ID": m.id,
                    "Nome": m.name,
                    "Descrição": m.description or "",
                    "Preço (centavos)": m.price,
                    "Preço (R$)": f"R$ {m.price / 100:.2f}",
                    "Máx. Participantes": m.max_participants or "Ilimitado",
                    "Ativo": _yes_no(m.is_active),
                    "Ordem": m.order,
                }
                for m in modalities
            ],
            ["ID", "Nome", "Descrição", "Preço (centavos)", "Preço (R$)",
             "Máx. Participantes", "Ativo", "Ordem"],
        )

    if config:
        settings_rows = [
            ("URL Código de Conduta", config.code_of_conduct_url or ""),
            ("Informações de Pagamento", config.payment_info or ""),
            ("Instruções de Pagamento", config.payment_instructions or ""),
            ("Detalhes Bancários", config.bank_details or ""),
            ("Chave PIX", config.pix_key or ""),
            ("Inscrições Habilitadas", _yes_no(config.registration_enabled)),
            ("Aprovação Automática", _yes_no(config.auto_approval)),
            ("Atualizado em", _local_date(config.updated_at)),
        ]
        sheets["Configurações"] = (
            [{"Campo": k, "Valor": v} for k, v in settings_rows],
            ["Campo", "Valor"],
        )

    try:
        buffer = _write_workbook(sheets)
    except Exception as e:
        logger.error(f"Failed to export assembly {assembly_id}: {e}", exc_info=True)
        raise ReportGenerationError(f"Failed to export assembly: {e}") from e

    return AGReportResult(
        buffer=buffer,
        filename=f"relatorio_{_safe_name(assembly.name)}_{utcnow().date().isoformat()}.xlsx",
        stats={
            "participants": len(participants),
            "registrations": len(registrations),
            "modalities": len(modalities),
        },
    )
