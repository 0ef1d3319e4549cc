"""
Configuration du logging de l'application via loguru.

Deux sorties:
- stderr : lisible, coloree, au niveau demande (-v / -q ou MOVIEBROWSER_LOG_LEVEL)
- fichier : JSON avec rotation, toujours en DEBUG (requetes TMDB, ecritures du store)

Les modules loguent via `from loguru import logger` avec des champs
structures (logger.info("Favorite saved", id=..., kind=...)); ces champs
apparaissent dans "extra" des enregistrements JSON.
"""

import sys
from pathlib import Path

from loguru import logger

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan> | "
    "<level>{message}</level> <dim>{extra}</dim>"
)


def configure_logging(
    log_level: str = "INFO",
    log_file: Path = Path("logs/moviebrowser.log"),
    rotation_size: str = "10 MB",
    retention_count: int = 5,
) -> None:
    """Configure le logging de l'application.

    Peut etre rappelee (ex: option -v de la CLI): les handlers precedents
    sont remplaces.

    Args :
        log_level : Niveau minimum de la sortie console (DEBUG, INFO, WARNING, ERROR)
        log_file : Chemin vers le fichier de log
        rotation_size : Taille maximale du fichier avant rotation (ex: "10 MB")
        retention_count : Nombre de fichiers rotatifs a conserver
    """
    logger.remove()
    logger.configure(extra={"app": "moviebrowser"})

    logger.add(sys.stderr, level=log_level.upper(), format=CONSOLE_FORMAT, colorize=True)

    log_file.parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_file,
        level="DEBUG",
        format="{message}",
        serialize=True,
        rotation=rotation_size,
        retention=retention_count,
        compression="zip",
        enqueue=True,  # ecritures du store depuis le pool de threads
    )

    logger.debug("Logging configured", log_file=str(log_file), level=log_level)
