from openstudio import model as osmod

from . import registry
from .load import loads_to_openstudio
from .registry import TranslationContext

def program_type_to_openstudio(program_type: dict, openstudio_model: osmod.Model,
                               context: TranslationContext) -> osmod.SpaceType:
    """
    Translate a ProgramTypeAbridged into an openstudio SpaceType carrying its loads.

    The setpoint is not part of a SpaceType in openstudio, it is registered so that the
    rooms using this program can get a thermostat.

    Parameters
    ----------
    program_type : dict
        the ProgramTypeAbridged dictionary.

    openstudio_model : osmod.Model
        the model to add the space type to.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    osmod.SpaceType
        the resultant space type.
    """
    program_id = program_type['identifier']
    space_type = osmod.SpaceType(openstudio_model)
    space_type.setName(program_id)
    display_name = program_type.get('display_name')
    if display_name is not None:
        space_type.setDisplayName(display_name)
    loads_to_openstudio(program_type, openstudio_model, space_type, context)

    setpoint = program_type.get('setpoint')
    if setpoint is not None:
        context.registry.register(registry.PROGRAM_SETPOINT, program_id, setpoint)

    context.registry.register(registry.PROGRAM_TYPE, program_id, space_type)
    return space_type
