from openstudio import model as osmod

from . import registry
from .errors import UnknownTypeTagError
from .registry import TranslationContext

def _set_name(os_material, material: dict):
    os_material.setName(material['identifier'])
    display_name = material.get('display_name')
    if display_name is not None:
        os_material.setDisplayName(display_name)

def energy_material_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.StandardOpaqueMaterial:
    """
    Translate an EnergyMaterial into an openstudio StandardOpaqueMaterial.

    Parameters
    ----------
    material : dict
        the EnergyMaterial dictionary.

    openstudio_model : osmod.Model
        the model to add the material to.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    osmod.StandardOpaqueMaterial
        the resultant material.
    """
    os_material = osmod.StandardOpaqueMaterial(openstudio_model)
    _set_name(os_material, material)
    os_material.setThickness(material['thickness'])
    os_material.setThermalConductivity(material['conductivity'])
    os_material.setDensity(material['density'])
    os_material.setSpecificHeat(material['specific_heat'])
    os_material.setRoughness(material.get('roughness', 'MediumRough'))
    os_material.setThermalAbsorptance(material.get('thermal_absorptance', 0.9))
    os_material.setSolarAbsorptance(material.get('solar_absorptance', 0.7))
    os_material.setVisibleAbsorptance(material.get('visible_absorptance', 0.7))
    return os_material

def energy_material_no_mass_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.MasslessOpaqueMaterial:
    os_material = osmod.MasslessOpaqueMaterial(openstudio_model)
    _set_name(os_material, material)
    os_material.setThermalResistance(material['r_value'])
    os_material.setRoughness(material.get('roughness', 'MediumRough'))
    os_material.setThermalAbsorptance(material.get('thermal_absorptance', 0.9))
    os_material.setSolarAbsorptance(material.get('solar_absorptance', 0.7))
    os_material.setVisibleAbsorptance(material.get('visible_absorptance', 0.7))
    return os_material

def window_gas_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.Gas:
    os_material = osmod.Gas(openstudio_model)
    _set_name(os_material, material)
    os_material.setThickness(material.get('thickness', 0.0125))
    os_material.setGasType(material.get('gas_type', 'Air'))
    context.registry.register(registry.GAS_GAP, material['identifier'], material)
    return os_material

def window_gas_mixture_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.GasMixture:
    """
    Translate an EnergyWindowMaterialGasMixture into an openstudio GasMixture. Up to four gases are supported.
    """
    os_material = osmod.GasMixture(openstudio_model)
    _set_name(os_material, material)
    os_material.setThickness(material.get('thickness', 0.0125))
    gas_types = material['gas_types']
    gas_fractions = material['gas_fractions']
    os_material.setNumberofGasesinMixture(len(gas_types))
    setters = [(os_material.setGas1Type, os_material.setGas1Fraction),
               (os_material.setGas2Type, os_material.setGas2Fraction),
               (os_material.setGas3Type, os_material.setGas3Fraction),
               (os_material.setGas4Type, os_material.setGas4Fraction)]
    for (set_type, set_fraction), gas_type, gas_fraction in zip(setters, gas_types, gas_fractions):
        set_type(gas_type)
        set_fraction(gas_fraction)
    context.registry.register(registry.GAS_GAP, material['identifier'], material)
    return os_material

def window_gas_custom_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.Gas:
    os_material = osmod.Gas(openstudio_model)
    _set_name(os_material, material)
    os_material.setThickness(material.get('thickness', 0.0125))
    os_material.setGasType('Custom')
    os_material.setConductivityCoefficientA(material['conductivity_coeff_a'])
    os_material.setViscosityCoefficientA(material['viscosity_coeff_a'])
    os_material.setSpecificHeatCoefficientA(material['specific_heat_coeff_a'])
    os_material.setConductivityCoefficientB(material.get('conductivity_coeff_b', 0))
    os_material.setViscosityCoefficientB(material.get('viscosity_coeff_b', 0))
    os_material.setSpecificHeatCoefficientB(material.get('specific_heat_coeff_b', 0))
    os_material.setConductivityCoefficientC(material.get('conductivity_coeff_c', 0))
    os_material.setViscosityCoefficientC(material.get('viscosity_coeff_c', 0))
    os_material.setSpecificHeatCoefficientC(material.get('specific_heat_coeff_c', 0))
    os_material.setSpecificHeatRatio(material.get('specific_heat_ratio', 1.0))
    os_material.setMolecularWeight(material.get('molecular_weight', 20.0))
    context.registry.register(registry.GAS_GAP, material['identifier'], material)
    return os_material

def window_simple_glazing_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.SimpleGlazing:
    os_material = osmod.SimpleGlazing(openstudio_model)
    _set_name(os_material, material)
    os_material.setUFactor(material['u_factor'])
    os_material.setSolarHeatGainCoefficient(material['shgc'])
    os_material.setVisibleTransmittance(material.get('vt', 0.54))
    return os_material

def window_glazing_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.StandardGlazing:
    """
    Translate an EnergyWindowMaterialGlazing into an openstudio StandardGlazing.

    Parameters
    ----------
    material : dict
        the EnergyWindowMaterialGlazing dictionary. The optical properties are specified by average spectral values.

    openstudio_model : osmod.Model
        the model to add the material to.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    osmod.StandardGlazing
        the resultant material.
    """
    os_material = osmod.StandardGlazing(openstudio_model)
    _set_name(os_material, material)
    os_material.setOpticalDataType('SpectralAverage')
    os_material.setThickness(material.get('thickness', 0.003))
    os_material.setSolarTransmittanceatNormalIncidence(material.get('solar_transmittance', 0.85))
    os_material.setFrontSideSolarReflectanceatNormalIncidence(material.get('solar_reflectance', 0.075))
    os_material.setBackSideSolarReflectanceatNormalIncidence(material.get('solar_reflectance_back', 0.075))
    os_material.setVisibleTransmittanceatNormalIncidence(material.get('visible_transmittance', 0.9))
    os_material.setFrontSideVisibleReflectanceatNormalIncidence(material.get('visible_reflectance', 0.075))
    os_material.setBackSideVisibleReflectanceatNormalIncidence(material.get('visible_reflectance_back', 0.075))
    os_material.setInfraredTransmittanceatNormalIncidence(material.get('infrared_transmittance', 0.0))
    os_material.setFrontSideInfraredHemisphericalEmissivity(material.get('emissivity', 0.84))
    os_material.setBackSideInfraredHemisphericalEmissivity(material.get('emissivity_back', 0.84))
    os_material.setThermalConductivity(material.get('conductivity', 0.9))
    os_material.setDirtCorrectionFactorforSolarandVisibleTransmittance(material.get('dirt_correction', 1.0))
    os_material.setSolarDiffusing(material.get('solar_diffusing', False))
    return os_material

def window_shade_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.Shade:
    os_material = osmod.Shade(openstudio_model)
    _set_name(os_material, material)
    os_material.setThickness(material.get('thickness', 0.005))
    os_material.setSolarTransmittance(material.get('solar_transmittance', 0.4))
    os_material.setSolarReflectance(material.get('solar_reflectance', 0.5))
    os_material.setVisibleTransmittance(material.get('visible_transmittance', 0.4))
    os_material.setVisibleReflectance(material.get('visible_reflectance', 0.4))
    os_material.setThermalHemisphericalEmissivity(material.get('emissivity', 0.9))
    os_material.setThermalTransmittance(material.get('infrared_transmittance', 0))
    os_material.setConductivity(material.get('conductivity', 0.1))
    os_material.setShadetoGlassDistance(material.get('distance_to_glass', 0.05))
    os_material.setTopOpeningMultiplier(material.get('top_opening_multiplier', 0.5))
    os_material.setBottomOpeningMultiplier(material.get('bottom_opening_multiplier', 0.5))
    os_material.setLeftSideOpeningMultiplier(material.get('left_opening_multiplier', 0.5))
    os_material.setRightSideOpeningMultiplier(material.get('right_opening_multiplier', 0.5))
    os_material.setAirflowPermeability(material.get('airflow_permeability', 0))
    return os_material

def window_blind_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext) -> osmod.Blind:
    """
    Translate an EnergyWindowMaterialBlind into an openstudio Blind. Back side properties default to the front side ones.
    """
    os_material = osmod.Blind(openstudio_model)
    _set_name(os_material, material)
    os_material.setSlatOrientation(material.get('slat_orientation', 'Horizontal'))
    os_material.setSlatWidth(material.get('slat_width', 0.025))
    os_material.setSlatSeparation(material.get('slat_separation', 0.01875))
    os_material.setSlatThickness(material.get('slat_thickness', 0.001))
    os_material.setSlatAngle(material.get('slat_angle', 45))
    os_material.setSlatConductivity(material.get('slat_conductivity', 221))

    beam_trans = material.get('beam_solar_transmittance', 0)
    beam_ref = material.get('beam_solar_reflectance', 0.5)
    os_material.setSlatBeamSolarTransmittance(beam_trans)
    os_material.setFrontSideSlatBeamSolarReflectance(beam_ref)
    os_material.setBackSideSlatBeamSolarReflectance(material.get('beam_solar_reflectance_back', beam_ref))
    os_material.setSlatDiffuseSolarTransmittance(material.get('diffuse_solar_transmittance', beam_trans))
    os_material.setFrontSideSlatDiffuseSolarReflectance(material.get('diffuse_solar_reflectance', beam_ref))
    os_material.setBackSideSlatDiffuseSolarReflectance(material.get('diffuse_solar_reflectance_back', beam_ref))

    vis_trans = material.get('beam_visible_transmittance', 0)
    vis_ref = material.get('beam_visible_reflectance', 0.5)
    os_material.setSlatBeamVisibleTransmittance(vis_trans)
    os_material.setFrontSideSlatBeamVisibleReflectance(vis_ref)
    os_material.setBackSideSlatBeamVisibleReflectance(material.get('beam_visible_reflectance_back', vis_ref))
    os_material.setSlatDiffuseVisibleTransmittance(material.get('diffuse_visible_transmittance', vis_trans))
    os_material.setFrontSideSlatDiffuseVisibleReflectance(material.get('diffuse_visible_reflectance', vis_ref))
    os_material.setBackSideSlatDiffuseVisibleReflectance(material.get('diffuse_visible_reflectance_back', vis_ref))

    os_material.setSlatInfraredHemisphericalTransmittance(material.get('infrared_transmittance', 0))
    emissivity = material.get('emissivity', 0.9)
    os_material.setFrontSideSlatInfraredHemisphericalEmissivity(emissivity)
    os_material.setBackSideSlatInfraredHemisphericalEmissivity(material.get('emissivity_back', emissivity))
    os_material.setBlindtoGlassDistance(material.get('distance_to_glass', 0.05))
    os_material.setBlindTopOpeningMultiplier(material.get('top_opening_multiplier', 0.5))
    os_material.setBlindBottomOpeningMultiplier(material.get('bottom_opening_multiplier', 0.5))
    os_material.setBlindLeftSideOpeningMultiplier(material.get('left_opening_multiplier', 0.5))
    os_material.setBlindRightSideOpeningMultiplier(material.get('right_opening_multiplier', 0.5))
    return os_material

MATERIAL_BUILDERS = {
    'EnergyMaterial': energy_material_to_openstudio,
    'EnergyMaterialNoMass': energy_material_no_mass_to_openstudio,
    'EnergyWindowMaterialGas': window_gas_to_openstudio,
    'EnergyWindowMaterialGasMixture': window_gas_mixture_to_openstudio,
    'EnergyWindowMaterialGasCustom': window_gas_custom_to_openstudio,
    'EnergyWindowMaterialSimpleGlazSys': window_simple_glazing_to_openstudio,
    'EnergyWindowMaterialBlind': window_blind_to_openstudio,
    'EnergyWindowMaterialGlazing': window_glazing_to_openstudio,
    'EnergyWindowMaterialShade': window_shade_to_openstudio,
}

def material_to_openstudio(material: dict, openstudio_model: osmod.Model, context: TranslationContext):
    """
    Translate any material dictionary, chosen by its type, and register the result.

    Parameters
    ----------
    material : dict
        a material dictionary with one of the MATERIAL_BUILDERS types.

    openstudio_model : osmod.Model
        the model to add the material to.

    context : TranslationContext
        the context of the translation.

    Returns
    -------
    osmod.Material
        the resultant material.
    """
    material_type = material.get('type')
    try:
        builder = MATERIAL_BUILDERS[material_type]
    except KeyError:
        raise UnknownTypeTagError('material', material_type) from None
    os_material = builder(material, openstudio_model, context)
    context.registry.register(registry.MATERIAL, material['identifier'], os_material)
    return os_material
