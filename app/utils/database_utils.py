from datetime import date, datetime, time, timedelta
from typing import Tuple
from zoneinfo import ZoneInfo

from app.config.settings import TIMEZONE


def now_trimmed() -> datetime:
    """Retorna o horário local da loja (sem timezone e sem microsegundos).

    Os bancos remoto e local guardam horário de parede da loja, então o
    datetime é naive para comparar igual nos dois.
    """
    return datetime.now(ZoneInfo(TIMEZONE)).replace(microsecond=0, tzinfo=None)


def hoje() -> date:
    return now_trimmed().date()


def limites_do_dia(dia: date) -> Tuple[datetime, datetime]:
    inicio = datetime.combine(dia, time.min)
    return inicio, inicio + timedelta(days=1)
