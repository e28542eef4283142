"""Unity JSON export tests"""
import json

from facial_animation.config.constants import ACTION_UNIT_NAMES, HORIZONTAL_HEAD_ORIENTATION
from facial_animation.models import ActionUnitState, TickResult
from facial_animation.utils.json_exporter import to_json_string, to_unity_json


def test_to_unity_json():
    state = ActionUnitState()
    state.set(HORIZONTAL_HEAD_ORIENTATION, 0.123456)
    result = TickResult(action_units=state, face_detected=True)

    data = to_unity_json(result, calibrated=True)

    assert set(data['action_units']) == set(ACTION_UNIT_NAMES)
    assert data['action_units'][HORIZONTAL_HEAD_ORIENTATION] == 0.1235
    assert data['face_detected'] is True
    assert data['calibrated'] is True
    assert 'timestamp' in data


def test_to_json_string_is_single_line():
    message = to_json_string(TickResult(action_units=ActionUnitState()))

    assert '\n' not in message
    assert json.loads(message)['calibrated'] is False
