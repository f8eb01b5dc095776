# tests/services/test_report_service.py

import re
import pandas as pd
import pytest
from datetime import datetime, timezone

from ag_service.core.exceptions import NotFoundError
from ag_service.schemas.report import (
    AvulsaReportInput,
    ReportRow,
    RosterStatus,
    SessionReportInput,
)
from ag_service.schemas.registration import ReceiptUpload
from ag_service.services import registration_service, report_service
from ag_service.services.report_service import generate_ag_report, status_label
from tests.utils.assembly import add_roster, create_modality, create_random_assembly
from tests.utils.registration import create_registration, set_config


def _row(participant_id, participant_type, attendance="present", **fields):
    return ReportRow(
        participant_id=participant_id,
        participant_type=participant_type,
        participant_name=fields.pop("name", participant_id),
        attendance=attendance,
        **fields,
    )


def _read(result):
    return pd.read_excel(result.buffer, sheet_name=None)


def test_status_labels():
    assert status_label("present") == "Presente"
    assert status_label("absent") == "Ausente"
    assert status_label("excluded") == "Excluído do quórum"
    assert status_label("not-counting") == "Não contabilizado"
    assert status_label(None) == "Não contabilizado"


def test_plenaria_report_uses_roster_standing():
    report = SessionReportInput(
        session_name="Plenária Final",
        session_type="plenaria",
        records=[
            _row("eb_1", "eb", role="Presidente"),
            _row("cr_1", "cr", attendance="absent"),
            # Snapshot says Pleno but the roster has since demoted it
            _row("cl_1", "comite", participant_status="Pleno", escola="UFMG", cidade="BH", uf="MG"),
            _row("cl_2", "comite", attendance="not-counting", participant_status="Não-pleno"),
            _row("cl_3", "comite", attendance="excluded", participant_status="Pleno"),
        ],
        committee_roster=[
            RosterStatus(participant_id="cl_1", status="Não-pleno"),
            RosterStatus(participant_id="cl_2", status="Pleno"),
        ],
    )

    result = generate_ag_report(report)

    assert result.stats == {
        "ebs": 1,
        "crs": 1,
        "comitesPlenos": 1,
        "comitesNaoPlenos": 2,
        "total": 5,
        "type": 'Plenária "Plenária Final"',
    }
    sheets = _read(result)
    assert list(sheets) == [
        "Diretoria Executiva",
        "Coordenadores Regionais",
        "Comitês Plenos",
        "Comitês Não-Plenos",
    ]
    assert sheets["Comitês Plenos"]["Nome"].tolist() == ["cl_2"]
    assert sheets["Comitês Plenos"]["Status"].tolist() == ["Não contabilizado"]
    # Missing from the roster counts as Não-pleno
    assert sheets["Comitês Não-Plenos"]["Nome"].tolist() == ["cl_1", "cl_3"]
    non_full = sheets["Comitês Não-Plenos"].iloc[0]
    assert non_full["Tipo"] == "Comitê Não-Pleno"
    assert non_full["Localização"] == "BH, MG"
    assert sheets["Diretoria Executiva"].iloc[0]["Cargo"] == "Presidente"
    assert sheets["Coordenadores Regionais"].iloc[0]["Status"] == "Ausente"


def test_plenaria_without_roster_uses_row_status():
    report = SessionReportInput(
        session_name="Plenária",
        session_type="plenaria",
        records=[
            _row("cl_1", "comite", participant_status="Pleno"),
            _row("cl_2", "comite", participant_status="pleno"),
        ],
    )

    result = generate_ag_report(report)

    assert result.stats["comitesPlenos"] == 1
    assert result.stats["comitesNaoPlenos"] == 1


def test_sessao_with_individuals_gets_single_participant_sheet():
    marked = datetime(2026, 3, 14, 15, 30, tzinfo=timezone.utc)
    report = SessionReportInput(
        session_name="Sessão de Abertura",
        session_type="sessao",
        records=[
            _row("reg_1", "individual", name="Joana Prado", comite_local="IFMSA UnB", last_updated=marked),
            _row("reg_2", "individual", attendance="absent", name="Rafael Costa"),
            _row("user_1", "user", attendance="not-counting", name="Ana Walk-in"),
        ],
    )

    result = generate_ag_report(report)

    assert result.stats == {
        "present": 1,
        "total": 3,
        "type": "sessao",
        "sessionName": "Sessão de Abertura",
    }
    assert result.filename.startswith("relatorio-presenca-sessao-Sess_o_de_Abertura-")
    sheets = _read(result)
    assert list(sheets) == ["Participantes da Sessão"]
    sheet = sheets["Participantes da Sessão"]
    assert sheet.columns.tolist() == report_service.PARTICIPANT_COLUMNS
    first = sheet.iloc[0]
    assert first["Cargo/Função"] == "Participante"
    assert first["Comitê/Instituição"] == "IFMSA UnB"
    # 15:30 UTC is 12:30 in Brasília
    assert first["Última Atualização"] == "14/03/2026, 12:30:00"
    assert sheet.iloc[1]["Última Atualização"] == "-"


def test_sessao_without_individuals_falls_back_to_standard_sheets():
    report = SessionReportInput(
        session_name="Sessão",
        session_type="sessao",
        records=[_row("eb_1", "eb")],
    )

    result = generate_ag_report(report)

    assert result.stats["type"] == 'Sessão "Sessão"'
    assert result.stats["ebs"] == 1
    assert len(_read(result)) == 4


def test_avulsa_report_with_extra_participants():
    report = AvulsaReportInput(
        name="Chamada Extra",
        ebs=[_row("eb_1", "eb")],
        comites_plenos=[_row("cl_1", "comite")],
        comites_nao_plenos=[_row("cl_2", "comite", attendance="absent")],
        participantes=[_row("user_1", "user")],
    )

    result = generate_ag_report(report)

    assert result.stats == {
        "ebs": 1,
        "crs": 0,
        "comitesPlenos": 1,
        "comitesNaoPlenos": 1,
        "participantes": 1,
        "total": 4,
        "type": "Chamada Avulsa",
    }
    sheets = _read(result)
    assert "Participantes da Sessão" in sheets
    assert sheets["Coordenadores Regionais"].empty
    assert sheets["Coordenadores Regionais"].columns.tolist() == report_service.OFFICER_COLUMNS
    assert sheets["Comitês Plenos"].iloc[0]["Tipo"] == "Comitê Pleno"


def test_unnamed_roll_call_filename():
    result = generate_ag_report(AvulsaReportInput())

    assert re.fullmatch(r"relatorio-presenca-ag-\d{4}-\d{2}-\d{2}\.xlsx", result.filename)
    assert result.stats["total"] == 0


def test_named_report_filename_is_sanitized():
    result = generate_ag_report(AvulsaReportInput(name="AG 2026/1"))

    assert re.fullmatch(r"relatorio-presenca-ag-AG_2026_1-\d{4}-\d{2}-\d{2}\.xlsx", result.filename)


# --- Full assembly export ---
def test_assembly_report_sheets(db):
    assembly = create_random_assembly(db, name="AG Brasília")
    add_roster(db, assembly.id)
    modality = create_modality(db, assembly.id)
    create_registration(db, assembly.id, modality_id=modality.id)
    set_config(db, pix_key="pix@ifmsabrazil.org")

    result = report_service.generate_assembly_report(db, assembly_id=assembly.id)

    assert re.fullmatch(r"relatorio_AG_Bras_lia_\d{4}-\d{2}-\d{2}\.xlsx", result.filename)
    assert result.stats == {"participants": 4, "registrations": 1, "modalities": 1}
    sheets = _read(result)
    assert list(sheets) == [
        "Informações da AG",
        "Participantes",
        "Inscrições",
        "Modalidades",
        "Configurações",
    ]
    assert sheets["Inscrições"].iloc[0]["Modalidade"] == "Participante"
    assert sheets["Modalidades"].iloc[0]["Preço (R$)"] == "R$ 150.00"


def test_assembly_report_flags_registrations_with_receipt(db):
    assembly = create_random_assembly(db)
    with_receipt = create_registration(db, assembly.id, participant_id="user_1", name="Ana Alves")
    create_registration(db, assembly.id, participant_id="user_2", name="Bruno Reis")
    registration_service.upload_payment_receipt(
        db,
        registration_id=with_receipt.id,
        receipt=ReceiptUpload(
            file_name="comprovante.pdf",
            file_type="application/pdf",
            file_size=2048,
            storage_id="storage_abc",
        ),
        uploaded_by="user_1",
    )

    result = report_service.generate_assembly_report(db, assembly_id=assembly.id)

    sheet = _read(result)["Inscrições"].set_index("Nome")
    assert sheet.loc["Ana Alves", "Tem Comprovante"] == "Sim"
    assert sheet.loc["Bruno Reis", "Tem Comprovante"] == "Não"


def test_assembly_report_skips_empty_sections(db):
    assembly = create_random_assembly(db)

    result = report_service.generate_assembly_report(db, assembly_id=assembly.id)

    assert list(_read(result)) == ["Informações da AG"]


def test_assembly_report_unknown_assembly(db):
    with pytest.raises(NotFoundError):
        report_service.generate_assembly_report(db, assembly_id="asm_missing")
