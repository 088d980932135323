import sys
import logging
import argparse
from pathlib import Path

from . import openstudio_utils
from .model import Model

logger = logging.getLogger(__name__)

#===================================================================================================
# region: FUNCTIONS

def parse_args(argv: list[str] = None):
    # create parser object
    parser = argparse.ArgumentParser(description = "Convert Honeybee JSON Models to OpenStudio Models")

    # defining arguments for parser object
    parser.add_argument('-i', '--hbjson', type = str,
                        metavar = 'FILE',
                        help = 'The file path of the Honeybee JSON to convert')

    parser.add_argument('-o', '--osmod', type = str,
                        metavar = 'FILE', default = None,
                        help = 'The file path of the OpenStudio result')

    parser.add_argument('-f', '--idf', type = str,
                        metavar = 'FILE', default = None,
                        help = 'Also write the EnergyPlus idf of the result to this file path')

    parser.add_argument('-e', '--epw', type = str,
                        metavar = 'FILE', default = None,
                        help = 'The file path of the weather file to attach to the model')

    parser.add_argument('-d', '--ddy', type = str,
                        metavar = 'FILE', default = None,
                        help = 'The file path of the ddy file with the design days, used together with the epw')

    parser.add_argument('-v', '--validate', action = 'store_true', default=False,
                        help = 'validate the Honeybee JSON against the schema before translating it')

    parser.add_argument('-p', '--process', action = 'store_true', default=False,
                        help = 'turn it on if piping in the hbjson filepath')

    # parse the arguments from standard input
    args = parser.parse_args(argv)
    if args.process == False and args.hbjson is None:
        parser.error('the -i/--hbjson argument is required unless the path is piped in with -p')
    return args

def hbjson2osmod(hbjson_path: str, osmod_path: str, idf_path: str = None, epw_path: str = None,
                 ddy_path: str = None, validate: bool = False) -> str:
    '''
    Converts a Honeybee JSON model to an openstudio model.

    Parameters
    ----------
    hbjson_path : str
        The file path of the Honeybee JSON.

    osmod_path : str
        The file path of the resultant openstudio model.

    idf_path : str, optional
        The file path of the resultant idf. No idf is written if None.

    epw_path : str, optional
        The file path of the weather file.

    ddy_path : str, optional
        The file path of the ddy file, only used with an epw.

    validate : bool, optional
        Raise a ValueError listing the schema violations of the Honeybee JSON if it is invalid.

    Returns
    -------
    str
        The file path of the openstudio result
    '''
    hb_model = Model.read_from_disk(hbjson_path)
    if validate:
        validation_errors = hb_model.validation_errors()
        if len(validation_errors) != 0:
            raise ValueError('Invalid Honeybee JSON:\n' + '\n'.join(validation_errors))

    osmodel = hb_model.to_openstudio_model()
    for warning in hb_model.warnings:
        logger.debug('translation warning: %s', warning)

    if epw_path is not None:
        openstudio_utils.add_design_days_and_weather_file(osmodel, epw_path, ddy_path=ddy_path)

    osmodel.save(osmod_path, True)
    if idf_path is not None:
        openstudio_utils.save2idf(idf_path, osmodel)
    return osmod_path

def main(argv: list[str] = None):
    logging.basicConfig(level=logging.INFO, format='%(levelname)s %(name)s: %(message)s')
    args = parse_args(argv)
    pipe_input = args.process
    if pipe_input == False:
        hbjson_path = args.hbjson
    else:
        lines = list(sys.stdin)
        hbjson_path = lines[0].strip()

    osmod_path = args.osmod
    if osmod_path is None:
        hbjson_parent_path = Path(hbjson_path).parent
        hbjson_name = Path(hbjson_path).stem
        res_folder = hbjson_parent_path.joinpath(hbjson_name)
        if res_folder.exists() == False:
            res_folder.mkdir(parents=True)
        osmod_path = res_folder.joinpath(hbjson_name + '.osm')
    else:
        res_folder = Path(osmod_path).parent
        if res_folder.exists() == False:
            res_folder.mkdir(parents=True)

    osmod_res_path = hbjson2osmod(hbjson_path, str(osmod_path), idf_path=args.idf, epw_path=args.epw,
                                  ddy_path=args.ddy, validate=args.validate)
    # make sure this output can be piped into another command on the cmd
    print(osmod_res_path)
    sys.stdout.flush()

# endregion: FUNCTIONS
#===================================================================================================
#===================================================================================================
# region: Main
if __name__=='__main__':
    main()
# endregion: Main
#===================================================================================================
