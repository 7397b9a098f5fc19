from conftest import NAMESPACE, received


def login(sio_factory, nickname):
    test_client = sio_factory()
    assert test_client.is_connected(NAMESPACE)
    test_client.emit('login', nickname, namespace=NAMESPACE)
    replies = received(test_client, 'login')
    assert replies == [{'success': True, 'nickname': nickname}]
    return test_client


def two_player_room(sio_factory, room_type='separate'):
    alice = login(sio_factory, 'alice')
    bob = login(sio_factory, 'bob')
    alice.emit('createRoom', {'name': 'A', 'type': room_type}, namespace=NAMESPACE)
    bob.emit('joinRoom', 1, namespace=NAMESPACE)
    received(alice)
    received(bob)
    return alice, bob


def test_socket_connect_greets(sio_factory):
    test_client = sio_factory()
    greeting = received(test_client, 'connected')
    assert greeting and greeting[0]['sid']


def test_duplicate_nickname_is_refused(sio_factory):
    login(sio_factory, 'alice')
    other = sio_factory()
    other.emit('login', 'alice', namespace=NAMESPACE)
    reply = received(other, 'login')
    assert reply == [{'success': False, 'nickname': 'alice', 'error': 'DuplicateNickname'}]


def test_create_room_broadcasts_list_and_seats_creator(sio_factory):
    alice = login(sio_factory, 'alice')
    watcher = login(sio_factory, 'bob')
    alice.emit('createRoom', '{"name": "A", "type": "separate"}', namespace=NAMESPACE)
    packets = received(alice)
    joined = [p['args'][0] for p in packets if p['name'] == 'joinRoom']
    assert joined[0]['id'] == 1
    assert joined[0]['user_one']['nickname'] == 'alice'
    assert joined[0]['user_two'] is None
    assert joined[0]['paused'] is True
    listing = received(watcher, 'roomList')
    assert listing == [{'type': 'separate', 'rooms': [joined[0]]}]


def test_room_snapshots_never_expose_timers(sio_factory):
    alice, bob = two_player_room(sio_factory)
    alice.emit('setReady', namespace=NAMESPACE)
    bob.emit('setReady', namespace=NAMESPACE)
    update = received(alice, 'gameUpdate')[-1]
    assert update['started'] is True
    assert set(update) == {
        'id', 'name', 'type', 'user_one', 'user_two', 'started', 'paused',
        'points', 'turn', 'cobra', 'food', 'delay_ms',
    }


def test_list_rooms_by_type(sio_factory):
    alice = login(sio_factory, 'alice')
    alice.emit('createRoom', {'name': 'S', 'type': 'split'}, namespace=NAMESPACE)
    received(alice)
    alice.emit('listRoomsByType', 'split', namespace=NAMESPACE)
    assert [r['name'] for r in received(alice, 'roomList')[0]['rooms']] == ['S']
    alice.emit('listRoomsByType', 'separate', namespace=NAMESPACE)
    assert received(alice, 'roomList') == [{'type': 'separate', 'rooms': []}]


def test_join_notifies_room_group(sio_factory):
    alice = login(sio_factory, 'alice')
    bob = login(sio_factory, 'bob')
    alice.emit('createRoom', {'name': 'A', 'type': 'separate'}, namespace=NAMESPACE)
    received(alice)
    bob.emit('joinRoom', '1', namespace=NAMESPACE)
    assert received(bob, 'joinRoom')[0]['user_two']['nickname'] == 'bob'
    assert received(alice, 'gameUpdate')[0]['user_two']['nickname'] == 'bob'


def test_errors_are_reported_to_the_caller(sio_factory):
    alice, bob = two_player_room(sio_factory)
    cara = login(sio_factory, 'cara')

    cara.emit('joinRoom', 1, namespace=NAMESPACE)
    assert received(cara, 'error') == [{'error': 'RoomFull', 'message': 'Room 1 is full', 'event': 'joinRoom'}]

    cara.emit('joinRoom', 7, namespace=NAMESPACE)
    assert received(cara, 'error')[0]['error'] == 'RoomNotFound'

    alice.emit('createRoom', {'name': 'B', 'type': 'split'}, namespace=NAMESPACE)
    assert received(alice, 'error')[0]['error'] == 'AlreadyInRoom'

    cara.emit('createRoom', {'name': 'C', 'type': 'diagonal'}, namespace=NAMESPACE)
    assert received(cara, 'error')[0]['error'] == 'InvalidPayload'

    cara.emit('move', 'up', namespace=NAMESPACE)
    assert received(cara, 'error')[0]['error'] == 'RoomNotFound'

    stranger = sio_factory()
    received(stranger)
    stranger.emit('leaveRoom', namespace=NAMESPACE)
    assert received(stranger, 'error')[0]['error'] == 'UserNotFound'

    assert received(bob, 'error') == []


def test_losing_move_reaches_both_players(sio_factory):
    alice, bob = two_player_room(sio_factory)
    alice.emit('setReady', namespace=NAMESPACE)
    bob.emit('setReady', namespace=NAMESPACE)
    received(alice)
    received(bob)

    alice.emit('move', 'up', namespace=NAMESPACE)
    for player in (alice, bob):
        packets = received(player)
        names = [p['name'] for p in packets]
        assert names == ['loseGame', 'gameUpdate']
        assert packets[0]['args'][0]['started'] is False


def test_timer_tick_broadcasts_update(flask_app, sio_factory):
    alice, bob = two_player_room(sio_factory)
    alice.emit('setReady', namespace=NAMESPACE)
    bob.emit('setReady', namespace=NAMESPACE)
    received(alice)
    lobby = flask_app.extensions['cobra_lobby']
    room = lobby.rooms.get(1)
    room.food = room.food._replace(x=14, y=14)
    assert lobby.timers.fire(1)
    update = received(alice, 'gameUpdate')[-1]
    assert update['cobra']['head'] == {'x': 0, 'y': 1}


def test_pause_and_unpause(sio_factory):
    alice, bob = two_player_room(sio_factory)
    alice.emit('setReady', namespace=NAMESPACE)
    bob.emit('setReady', namespace=NAMESPACE)
    received(alice)
    bob.emit('pause', namespace=NAMESPACE)
    assert received(alice, 'gameUpdate')[-1]['paused'] is True
    alice.emit('unpause', namespace=NAMESPACE)
    assert received(bob, 'gameUpdate')[-1]['paused'] is False


def test_leader_disconnect_promotes_opponent(sio_factory):
    alice, bob = two_player_room(sio_factory)
    alice.disconnect(namespace=NAMESPACE)
    update = received(bob, 'gameUpdate')[-1]
    assert update['user_one']['nickname'] == 'bob'
    assert update['user_two'] is None
    assert update['paused'] is True

    bob.emit('unpause', namespace=NAMESPACE)
    assert received(bob, 'error')[0]['error'] == 'OpponentMissing'


def test_leave_room_acknowledges_and_deletes_empty_room(sio_factory):
    alice = login(sio_factory, 'alice')
    alice.emit('createRoom', {'name': 'A', 'type': 'split'}, namespace=NAMESPACE)
    received(alice)
    alice.emit('leaveRoom', namespace=NAMESPACE)
    packets = received(alice)
    assert [p['args'][0] for p in packets if p['name'] == 'roomList'] == [{'type': 'split', 'rooms': []}]
    assert [p['args'][0] for p in packets if p['name'] == 'leaveRoom'] == [{'success': True, 'room_id': 1}]


def test_logout_frees_nickname(sio_factory):
    alice = login(sio_factory, 'alice')
    alice.emit('logout', namespace=NAMESPACE)
    assert received(alice, 'logout') == [{'success': True}]
    login(sio_factory, 'alice')


def test_http_room_views(client, sio_factory):
    assert client.get('/').status_code == 200
    alice = login(sio_factory, 'alice')
    alice.emit('createRoom', {'name': 'A', 'type': 'separate'}, namespace=NAMESPACE)

    res = client.get('/api/rooms?type=separate')
    assert res.status_code == 200
    assert [r['name'] for r in res.get_json()['rooms']] == ['A']

    assert client.get('/api/rooms?type=diagonal').status_code == 400
    assert client.get('/api/rooms/1').get_json()['user_one']['nickname'] == 'alice'
    res = client.get('/api/rooms/5')
    assert res.status_code == 404
    assert res.get_json()['error'] == 'RoomNotFound'
