import json

from client.storage import THEME_KEY, USER_KEY, LocalStorage


def test_set_and_get_item_persist_across_instances(tmp_path) -> None:
    path = tmp_path / 'device' / 'storage.json'
    LocalStorage(path).set_item(USER_KEY, json.dumps({'name': 'Ada'}))

    assert json.loads(LocalStorage(path).get_item(USER_KEY)) == {'name': 'Ada'}


def test_remove_item_leaves_other_keys(tmp_path) -> None:
    storage = LocalStorage(tmp_path / 'storage.json')
    storage.set_item(USER_KEY, '{}')
    storage.set_item(THEME_KEY, 'dark')

    storage.remove_item(USER_KEY)

    assert storage.get_item(USER_KEY) is None
    assert storage.get_item(THEME_KEY) == 'dark'


def test_get_item_tolerates_corrupt_file(tmp_path) -> None:
    path = tmp_path / 'storage.json'
    path.write_text('{not json', encoding='utf-8')

    assert LocalStorage(path).get_item(USER_KEY) is None
