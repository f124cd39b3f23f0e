"""
Reference data: default genres, workflow statuses and the bootstrap super admin.

Every step is idempotent, so it runs at each startup when
``SEED_REFERENCE_DATA`` is on. From the command line:

    python -m eca_admin.seed
"""
import asyncio
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eca_admin.core.config import Settings, settings
from eca_admin.database.db import Database
from eca_admin.models import Genre, Status, User
from eca_admin.models.enum import UserRole
from eca_admin.utils.hashing import hash_password

logger = logging.getLogger(__name__)

DEFAULT_GENRES = [
    ("Non classé", "Ouvrages qui ne correspondent à aucune catégorie spécifique"),
    ("Autobiographies-Mémoires", "Récits personnels relatant la vie et les expériences de leurs auteurs"),
    ("Romans étrangers", "Œuvres de fiction traduites de langues étrangères"),
    ("Religion - Spiritualité", "Ouvrages traitant des croyances religieuses et des pratiques spirituelles"),
    ("Histoire-Politique", "Livres analysant les événements historiques et leur contexte politique"),
    ("Romans français", "Œuvres de fiction écrites par des auteurs français"),
    ("Policiers - Thrillers", "Romans à suspense mettant en scène des enquêtes criminelles"),
    ("Sciences - Médecine", "Ouvrages scientifiques et médicaux pour professionnels et grand public"),
    ("Essais - Chroniques", "Textes analytiques et réflexifs sur des sujets variés"),
    ("Contes - Nouvelles", "Courts récits de fiction, histoires traditionnelles et contemporaines"),
    ("Biographies", "Récits de vie de personnalités marquantes"),
    ("Témoignages", "Récits personnels d'expériences vécues"),
    ("Psychologie - Développement personnel", "Ouvrages sur la compréhension de soi et l'épanouissement personnel"),
    ("Voyages", "Récits d'aventures et guides de destinations"),
    ("Philosophie", "Réflexions sur les questions fondamentales de l'existence et de la pensée"),
    ("Vie Domestique", "Guides pratiques pour la gestion du foyer et la vie quotidienne"),
    ("Arts - Culture", "Ouvrages sur les expressions artistiques et les phénomènes culturels"),
    ("Théâtre - Poésie", "Œuvres dramatiques et poétiques"),
    ("Divers", "Ouvrages aux thématiques variées ne correspondant pas aux autres catégories"),
    ("Ouvrages scolaires", "Manuels et supports pédagogiques pour l'enseignement"),
    ("Langue et langues", "Livres sur la linguistique et l'apprentissage des langues"),
    ("Economie- Finance", "Analyses des phénomènes économiques et financiers"),
    ("Droit - Economie", "Ouvrages juridiques et économiques"),
    ("Littérature Jeunesse", "Livres destinés aux jeunes lecteurs"),
    ("Technologies", "Ouvrages sur les innovations et avancées technologiques"),
    ("Périodiques", "Publications régulières : magazines, revues et journaux"),
    ("Sociologie", "Études des phénomènes sociaux et des comportements collectifs"),
    ("Bande dessinée", "Romans graphiques et bandes dessinées"),
    ("Roman Historique", "Romans se déroulant dans un contexte historique précis"),
    ("Politique", "Analyses des systèmes et événements politiques"),
    ("Archéologie", "Études des civilisations anciennes à travers leurs vestiges"),
    ("Arts", "Ouvrages dédiés aux différentes formes d'expression artistique"),
    ("Spiritualité", "Exploration des pratiques et croyances spirituelles"),
    ("Essai", "Textes réflexifs sur des sujets divers"),
    ("Histoire", "Études des événements et périodes historiques"),
    ("Poésie", "Œuvres poétiques et analyses de la poésie"),
    ("Alimentation", "Ouvrages sur la nutrition et la gastronomie"),
]

DEFAULT_STATUSES = [
    ("En attente de validation", "Demande reçue, à valider"),
    ("En attente de réception", "Livre commandé, en attente de réception"),
    ("Attente envoi vers lecteur", "Livre reçu, à envoyer au lecteur"),
    ("En cours de traitement", "Livre chez le lecteur"),
    ("Retourné à l'ECA", "Enregistrement retourné à l'ECA"),
    ("Commande terminée", None),
    ("Commande annulée", None),
]


async def seed_genres(db: AsyncSession) -> int:
    existing = set(await db.scalars(select(Genre.name)))
    missing = [
        Genre(name=name, description=description)
        for name, description in DEFAULT_GENRES
        if name not in existing
    ]
    db.add_all(missing)
    return len(missing)


async def seed_statuses(db: AsyncSession) -> int:
    existing = set(await db.scalars(select(Status.name)))
    missing = [
        Status(name=name, description=description, sort_order=position)
        for position, (name, description) in enumerate(DEFAULT_STATUSES, start=1)
        if name not in existing
    ]
    db.add_all(missing)
    return len(missing)


async def seed_admin(db: AsyncSession, config: Settings) -> bool:
    """Create the bootstrap super admin when ADMIN_EMAIL and ADMIN_PASSWORD are set"""
    if not (config.ADMIN_EMAIL and config.ADMIN_PASSWORD):
        return False
    email = config.ADMIN_EMAIL.strip().lower()
    if await db.scalar(select(User.id).where(User.email == email)) is not None:
        return False
    db.add(
        User(
            email=email,
            name="Administrateur",
            password_hash=hash_password(config.ADMIN_PASSWORD),
            role=UserRole.SUPER_ADMIN,
        )
    )
    return True


async def seed_reference_data(database: Database, config: Settings = settings) -> None:
    async with database.session() as db:
        genres = await seed_genres(db)
        statuses = await seed_statuses(db)
        admin = await seed_admin(db, config)
        await db.commit()
    logger.info(
        f"🌱 Seed done: {genres} genres, {statuses} statuses, "
        f"bootstrap admin {'created' if admin else 'unchanged'}"
    )


async def main(config: Settings = settings) -> None:
    database = Database(config.DATABASE_URL)
    try:
        await database.create_all()
        await seed_reference_data(database, config)
    finally:
        await database.dispose()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(main())
