# vida_plena/routes/eventos_fastapi.py
from typing import List, Optional

from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from vida_plena import ciclo_vida, eventos, financeiro
from vida_plena.armazenamento import ArmazenamentoS3, caminho_comprovante, caminho_foto, get_armazenamento
from vida_plena.auth import get_current_ator, requer
from vida_plena.database import get_db
from vida_plena.encerramento import verificar_encerramento
from vida_plena.enums import StatusEvento
from vida_plena.erros import RegistroNaoEncontrado
from vida_plena.image_utils import processar_foto_evento
from vida_plena.models.evolucao_evento import EvolucaoEvento
from vida_plena.models.fonte_recurso import FonteRecurso
from vida_plena.models.foto_evento import FotoEvento
from vida_plena.models.gasto_evento import GastoEvento
from vida_plena.permissoes import Acao, Ator, exigir
from vida_plena.schemas.evento import (
    ChecklistEncerramento,
    EncerramentoRequest,
    EventoCreate,
    EventoDetalhe,
    EventoRead,
    EventoUpdate,
    JustificativaRequest,
)
from vida_plena.schemas.evolucao_evento import EvolucaoEventoCreate, EvolucaoEventoRead
from vida_plena.schemas.fonte_recurso import FonteRecursoCreate, FonteRecursoRead
from vida_plena.schemas.foto_evento import FotoEventoRead
from vida_plena.schemas.gasto_evento import ComprovanteEnviado, GastoEventoCreate, GastoEventoRead


router = APIRouter(tags=["Eventos"])

consultar = requer(Acao.CONSULTAR_OPERACIONAL)


# --- EVENTOS ---

@router.post("", response_model=EventoRead, status_code=status.HTTP_201_CREATED)
def create_evento(evento: EventoCreate, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return eventos.criar_evento(db, evento, ator)


@router.get("", response_model=List[EventoRead])
def read_eventos(
    status_evento: Optional[StatusEvento] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    ator: Ator = Depends(consultar),
):
    return eventos.listar_eventos(db, status_evento, skip, limit)


@router.get("/{evento_id}", response_model=EventoDetalhe)
def read_evento(evento_id: int, db: Session = Depends(get_db), ator: Ator = Depends(consultar)):
    return eventos.detalhar_evento(db, evento_id)


@router.put("/{evento_id}", response_model=EventoRead)
def update_evento(evento_id: int, evento: EventoUpdate, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return eventos.atualizar_evento(db, evento_id, evento, ator)


# --- CICLO DE VIDA ---

@router.post("/{evento_id}/suspender", response_model=EventoRead)
def suspender_evento(evento_id: int, dados: JustificativaRequest, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return ciclo_vida.suspender_evento(db, evento_id, ator, dados.justificativa)


@router.post("/{evento_id}/reativar", response_model=EventoRead)
def reativar_evento(evento_id: int, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return ciclo_vida.reativar_evento(db, evento_id, ator)


@router.post("/{evento_id}/cancelar", response_model=EventoRead)
def cancelar_evento(evento_id: int, dados: JustificativaRequest, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return ciclo_vida.cancelar_evento(db, evento_id, ator, dados.justificativa)


@router.get("/{evento_id}/encerramento", response_model=ChecklistEncerramento)
def checklist_encerramento(evento_id: int, resumo_fechamento: str = "", db: Session = Depends(get_db),
                           ator: Ator = Depends(consultar)):
    """
    Mostra o que ainda falta para encerrar o evento (participantes, fotos,
    resumo e perfil). Não altera nada.
    """
    evento = ciclo_vida.obter_evento(db, evento_id)
    resultado = verificar_encerramento(db, evento, resumo_fechamento, ator)
    return ChecklistEncerramento(
        participantes=resultado.participantes,
        fotos=resultado.fotos,
        tamanho_resumo=resultado.tamanho_resumo,
        perfil_autorizado=resultado.perfil_autorizado,
        pendencias=resultado.pendencias,
        apto=resultado.apto,
    )


@router.post("/{evento_id}/encerrar", response_model=EventoRead)
def encerrar_evento(evento_id: int, dados: EncerramentoRequest, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return ciclo_vida.encerrar_evento(db, evento_id, ator, dados.resumo_fechamento)


# --- FONTES DE RECURSO ---

@router.get("/{evento_id}/fontes", response_model=List[FonteRecursoRead])
def read_fontes(evento_id: int, db: Session = Depends(get_db), ator: Ator = Depends(consultar)):
    ciclo_vida.obter_evento(db, evento_id)
    return db.query(FonteRecurso).filter(FonteRecurso.evento_id == evento_id).order_by(FonteRecurso.data_lancamento).all()


@router.post("/{evento_id}/fontes", response_model=FonteRecursoRead, status_code=status.HTTP_201_CREATED)
def create_fonte(evento_id: int, fonte: FonteRecursoCreate, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return financeiro.adicionar_fonte(db, evento_id, fonte, ator)


@router.put("/fontes/{fonte_id}", response_model=FonteRecursoRead)
def update_fonte(fonte_id: int, fonte: FonteRecursoCreate, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return financeiro.atualizar_fonte(db, fonte_id, fonte, ator)


@router.delete("/fontes/{fonte_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_fonte(fonte_id: int, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    financeiro.remover_fonte(db, fonte_id, ator)
    return None


# --- GASTOS ---

@router.get("/{evento_id}/gastos", response_model=List[GastoEventoRead])
def read_gastos(evento_id: int, db: Session = Depends(get_db), ator: Ator = Depends(consultar)):
    ciclo_vida.obter_evento(db, evento_id)
    return db.query(GastoEvento).filter(GastoEvento.evento_id == evento_id).order_by(GastoEvento.data_lancamento).all()


@router.post("/{evento_id}/gastos", response_model=GastoEventoRead, status_code=status.HTTP_201_CREATED)
def create_gasto(evento_id: int, gasto: GastoEventoCreate, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return financeiro.adicionar_gasto(db, evento_id, gasto, ator)


@router.put("/gastos/{gasto_id}", response_model=GastoEventoRead)
def update_gasto(gasto_id: int, gasto: GastoEventoCreate, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    return financeiro.atualizar_gasto(db, gasto_id, gasto, ator)


@router.delete("/gastos/{gasto_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_gasto(gasto_id: int, db: Session = Depends(get_db), ator: Ator = Depends(get_current_ator)):
    financeiro.remover_gasto(db, gasto_id, ator)
    return None


@router.post("/{evento_id}/comprovantes", response_model=ComprovanteEnviado, status_code=status.HTTP_201_CREATED)
def upload_comprovante(
    evento_id: int,
    arquivo: UploadFile = File(...),
    db: Session = Depends(get_db),
    ator: Ator = Depends(get_current_ator),
    armazenamento: ArmazenamentoS3 = Depends(get_armazenamento),
):
    """
    Envia o comprovante ao storage. A chave devolvida vai em
    s3_link_comprovante ao lançar o gasto.
    """
    exigir(ator, Acao.LANCAR_GASTO)
    ciclo_vida.exigir_evento_aberto(ciclo_vida.obter_evento(db, evento_id))

    caminho = caminho_comprovante(evento_id, arquivo.filename)
    chave = armazenamento.armazenar(caminho, arquivo.file, arquivo.content_type or "application/octet-stream")
    return ComprovanteEnviado(chave=chave, url=armazenamento.resolver(chave))


# --- FOTOS ---

@router.get("/{evento_id}/fotos", response_model=List[FotoEventoRead])
def read_fotos(
    evento_id: int,
    db: Session = Depends(get_db),
    ator: Ator = Depends(consultar),
    armazenamento: ArmazenamentoS3 = Depends(get_armazenamento),
):
    ciclo_vida.obter_evento(db, evento_id)
    fotos = db.query(FotoEvento).filter(FotoEvento.evento_id == evento_id).order_by(FotoEvento.data_envio).all()

    resposta = []
    for foto in fotos:
        item = FotoEventoRead.model_validate(foto)
        item.url = armazenamento.resolver(foto.s3_link_foto)
        resposta.append(item)
    return resposta


@router.post("/{evento_id}/fotos", response_model=FotoEventoRead, status_code=status.HTTP_201_CREATED)
def upload_foto(
    evento_id: int,
    foto: UploadFile = File(...),
    db: Session = Depends(get_db),
    ator: Ator = Depends(get_current_ator),
    armazenamento: ArmazenamentoS3 = Depends(get_armazenamento),
):
    exigir(ator, Acao.GERENCIAR_FOTOS)
    ciclo_vida.exigir_evento_aberto(ciclo_vida.obter_evento(db, evento_id))

    processed_image, mime_type = processar_foto_evento(foto.file)
    chave = armazenamento.armazenar(caminho_foto(evento_id), processed_image, mime_type)

    db_foto = FotoEvento(evento_id=evento_id, s3_link_foto=chave)
    db.add(db_foto)
    db.commit()
    db.refresh(db_foto)

    resposta = FotoEventoRead.model_validate(db_foto)
    resposta.url = armazenamento.resolver(chave)
    return resposta


@router.delete("/fotos/{foto_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_foto(
    foto_id: int,
    db: Session = Depends(get_db),
    ator: Ator = Depends(get_current_ator),
    armazenamento: ArmazenamentoS3 = Depends(get_armazenamento),
):
    exigir(ator, Acao.GERENCIAR_FOTOS)
    db_foto = db.query(FotoEvento).filter(FotoEvento.id == foto_id).first()
    if db_foto is None:
        raise RegistroNaoEncontrado("Foto não encontrada")
    ciclo_vida.exigir_evento_aberto(ciclo_vida.obter_evento(db, db_foto.evento_id))

    armazenamento.remover(db_foto.s3_link_foto)
    db.delete(db_foto)
    db.commit()
    return None


# --- EVOLUÇÕES ---

@router.get("/{evento_id}/evolucoes", response_model=List[EvolucaoEventoRead])
def read_evolucoes(evento_id: int, db: Session = Depends(get_db), ator: Ator = Depends(consultar)):
    ciclo_vida.obter_evento(db, evento_id)
    return (
        db.query(EvolucaoEvento)
        .filter(EvolucaoEvento.evento_id == evento_id)
        .order_by(EvolucaoEvento.data_evolucao.desc())
        .all()
    )


@router.post("/{evento_id}/evolucoes", response_model=EvolucaoEventoRead, status_code=status.HTTP_201_CREATED)
def create_evolucao(evento_id: int, evolucao: EvolucaoEventoCreate, db: Session = Depends(get_db),
                    ator: Ator = Depends(requer(Acao.REGISTRAR_EVOLUCAO))):
    ciclo_vida.exigir_evento_aberto(ciclo_vida.obter_evento(db, evento_id))

    db_evolucao = EvolucaoEvento(evento_id=evento_id, **evolucao.model_dump())
    db.add(db_evolucao)
    db.commit()
    db.refresh(db_evolucao)
    return db_evolucao
