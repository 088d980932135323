import json

import pytest

from hbjson2osmod import cli

class TestCli:
    def test_parse_args(self):
        args = cli.parse_args(['-i', 'model.hbjson', '-o', 'out/model.osm', '-v'])
        assert args.hbjson == 'model.hbjson'
        assert args.osmod == 'out/model.osm'
        assert args.validate
        assert args.process == False
        assert args.epw is None

    def test_writes_osm(self, tmp_path, capsys, model_dict, box_room):
        hbjson_path = tmp_path.joinpath('box.hbjson')
        with open(hbjson_path, 'w') as f:
            json.dump(model_dict([box_room('Room1')]), f)
        osmod_path = tmp_path.joinpath('res', 'box.osm')
        idf_path = tmp_path.joinpath('res', 'box.idf')
        cli.main(['-i', str(hbjson_path), '-o', str(osmod_path), '-f', str(idf_path), '-v'])
        assert osmod_path.exists()
        assert idf_path.exists()
        # the result path is printed so that it can be piped
        assert capsys.readouterr().out.strip() == str(osmod_path)

    def test_default_output_path(self, tmp_path, capsys, model_dict, box_room):
        hbjson_path = tmp_path.joinpath('box.hbjson')
        with open(hbjson_path, 'w') as f:
            json.dump(model_dict([box_room('Room1')]), f)
        cli.main(['-i', str(hbjson_path)])
        assert tmp_path.joinpath('box', 'box.osm').exists()

    def test_hbjson_required_without_pipe(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.parse_args(['-o', 'out/model.osm'])
        assert exc_info.value.code == 2
        assert '-i/--hbjson' in capsys.readouterr().err

    def test_pipe_without_hbjson(self):
        args = cli.parse_args(['-p'])
        assert args.process
        assert args.hbjson is None
