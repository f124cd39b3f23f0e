from eca_admin.models.user import User
from eca_admin.models.book import Book, BookGenre
from eca_admin.models.genre import Genre
from eca_admin.models.news import News
from eca_admin.models.status import Status
from eca_admin.models.order import Order
from eca_admin.models.assignment import Assignment, AssignmentReader
from eca_admin.models.coups_de_coeur import CoupsDeCoeur, CoupsDeCoeurBooks
from eca_admin.database.db import Base

from sqlalchemy.schema import CreateTable


if __name__ == "__main__":
    for table in Base.metadata.sorted_tables:
        print(CreateTable(table))
