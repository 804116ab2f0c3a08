# Importa a Base declarativa e registra todos os modelos
# para que create_all enxergue as tabelas.
from auth_api.db.base_class import Base

from auth_api.db.models.account import Account
