from pathlib import Path

DATA_DIR = Path(__file__).parent.joinpath('data', 'json')
STANDARDS_DATA_DIR = DATA_DIR.joinpath('standards')
STANDARDS_CATALOG_PATH = STANDARDS_DATA_DIR.joinpath('generic_standards.json')
SCHEMA_DATA_DIR = DATA_DIR.joinpath('schema')
MODEL_SCHEMA_PATH = SCHEMA_DATA_DIR.joinpath('model_schema.json')

# names the translation writes into every model
DEFAULT_CONSTRUCTION_SET = 'Default Generic Construction Set'
DEFAULT_SCHEDULE_TYPE_LIMIT = 'Fractional'
DEFAULT_SCHEDULE = 'Always On'
STANDARDS_BUILDING_TYPE = 'MediumOffice'
IDEAL_AIR_SUFFIX = ' Ideal Loads Air System'
# the thermal zone keeps the room identifier, the space takes it with this suffix
SPACE_SUFFIX = '_Space'

# template systems that build a single air loop shared by their rooms
TEMPLATE_HVAC_TYPES = ('VAV', 'PVAV', 'PSZ', 'ForcedAirFurnace')
