import pytest


async def befriend(client, users, a, b):
    """Invite from a to b and accept as b; returns the friendship id"""
    inv = await client.post('/api/friends/invite', json={'email': users[b][0]['email']}, headers=users[a][1])
    assert inv.status_code == 201, inv.text
    fid = inv.json()['friendship_id']
    acc = await client.post('/api/friends/accept', json={'friendship_id': fid}, headers=users[b][1])
    assert acc.status_code == 200, acc.text
    return fid


class TestComprehensiveAPI:
    """Comprehensive test suite for all API features"""

    @pytest.mark.asyncio
    async def test_healthz_and_security_headers(self, client):
        res = await client.get('/healthz')
        assert res.status_code == 200
        assert res.json() == {'status': 'ok'}
        assert res.headers['X-Content-Type-Options'] == 'nosniff'
        assert res.headers['X-Frame-Options'] == 'DENY'
        assert res.headers['Referrer-Policy'] == 'no-referrer'

    @pytest.mark.asyncio
    async def test_shopping_items(self, client, users):
        """Items are private, clamped and listed open-first"""
        _, ha = users['alice']
        _, hb = users['bob']

        r = await client.post('/api/items', json={'title': ' Milk ', 'qty': 0, 'note': '2%'}, headers=ha)
        assert r.status_code == 201, r.text
        milk = r.json()
        assert milk['title'] == 'Milk'
        assert milk['qty'] == 1
        assert milk['done'] is False

        r = await client.post('/api/items', json={'title': 'Eggs', 'qty': 100000}, headers=ha)
        eggs = r.json()
        assert eggs['qty'] == 9999

        missing = await client.post('/api/items', json={'title': '   '}, headers=ha)
        assert missing.status_code == 400
        assert missing.json()['detail'] == 'Missing title'

        toggled = await client.post(f"/api/items/{eggs['id']}/toggle", headers=ha)
        assert toggled.status_code == 200

        listing = await client.get('/api/items', headers=ha)
        assert [(i['title'], i['done']) for i in listing.json()] == [('Milk', False), ('Eggs', True)]

        # bob neither sees nor touches alice's list
        assert (await client.get('/api/items', headers=hb)).json() == []
        assert (await client.post(f"/api/items/{milk['id']}/toggle", headers=hb)).status_code == 404
        assert (await client.delete(f"/api/items/{milk['id']}", headers=hb)).status_code == 404

        deleted = await client.delete(f"/api/items/{milk['id']}", headers=ha)
        assert deleted.status_code == 200
        assert [i['title'] for i in (await client.get('/api/items', headers=ha)).json()] == ['Eggs']
        assert (await client.delete(f"/api/items/{milk['id']}", headers=ha)).status_code == 404

    @pytest.mark.asyncio
    async def test_goal_publish_creates_single_post(self, client, users):
        alice, ha = users['alice']

        r = await client.post('/api/goals', json={'title': 'Run 5k', 'target_date': '2026-12-31'}, headers=ha)
        assert r.status_code == 201, r.text
        goal = r.json()
        assert goal['is_public'] is False
        assert goal['target_date'] == '2026-12-31'

        pub = await client.post(f"/api/goals/{goal['id']}/publish", headers=ha)
        assert pub.status_code == 200
        post_id = pub.json()['post_id']
        assert post_id is not None

        again = await client.post(f"/api/goals/{goal['id']}/publish", headers=ha)
        assert again.json() == {'ok': True, 'post_id': None}

        feed = (await client.get('/api/feed', headers=ha)).json()
        assert len(feed) == 1
        assert feed[0]['id'] == post_id
        assert feed[0]['goal_id'] == goal['id']
        assert feed[0]['content'] == 'New goal: Run 5k'
        assert feed[0]['user_id'] == alice['id']

        goals = (await client.get('/api/goals', headers=ha)).json()
        assert goals[0]['is_public'] is True

        # someone else's goal is invisible to publish
        _, hb = users['bob']
        assert (await client.post(f"/api/goals/{goal['id']}/publish", headers=hb)).status_code == 404

    @pytest.mark.asyncio
    async def test_feed_posts_likes_and_comments(self, client, users):
        _, ha = users['alice']
        _, hb = users['bob']

        r = await client.post('/api/feed', json={'content': 'Fresh bread today'}, headers=ha)
        assert r.status_code == 201, r.text
        post = r.json()
        assert post['like_count'] == 0
        assert post['name'] == 'Alice'

        assert (await client.post('/api/feed', json={'content': ' '}, headers=ha)).status_code == 400

        like = await client.post(f"/api/feed/{post['id']}/like", headers=ha)
        assert like.json() == {'liked': True, 'like_count': 1}
        like = await client.post(f"/api/feed/{post['id']}/like", headers=hb)
        assert like.json() == {'liked': True, 'like_count': 2}
        unlike = await client.post(f"/api/feed/{post['id']}/like", headers=ha)
        assert unlike.json() == {'liked': False, 'like_count': 1}

        c = await client.post(f"/api/feed/{post['id']}/comment", json={'text': 'Looks great'}, headers=hb)
        assert c.status_code == 201
        assert (await client.post(f"/api/feed/{post['id']}/comment", json={'text': ''}, headers=hb)).status_code == 400

        comments = (await client.get(f"/api/feed/{post['id']}/comments", headers=ha)).json()
        assert [(x['text'], x['name']) for x in comments] == [('Looks great', 'Bob')]

        feed = (await client.get('/api/feed', headers=hb)).json()
        assert feed[0]['like_count'] == 1
        assert feed[0]['comment_count'] == 1

        assert (await client.post('/api/feed/999/like', headers=ha)).status_code == 404
        assert (await client.post('/api/feed/999/comment', json={'text': 'x'}, headers=ha)).status_code == 404
        assert (await client.get('/api/feed/999/comments', headers=ha)).status_code == 404

    @pytest.mark.asyncio
    async def test_feed_paging_is_clamped(self, client, users):
        _, ha = users['alice']
        for n in range(3):
            await client.post('/api/feed', json={'content': f'post {n}'}, headers=ha)

        newest = (await client.get('/api/feed', params={'limit': 'abc'}, headers=ha)).json()
        assert [p['content'] for p in newest] == ['post 2']

        page = (await client.get('/api/feed', params={'limit': 2, 'offset': 1}, headers=ha)).json()
        assert [p['content'] for p in page] == ['post 1', 'post 0']

        assert len((await client.get('/api/feed', params={'limit': 500}, headers=ha)).json()) == 3
        assert (await client.get('/api/feed', params={'offset': -5}, headers=ha)).json()[0]['content'] == 'post 2'

    @pytest.mark.asyncio
    async def test_prefs(self, client, users):
        _, ha = users['alice']

        r = await client.get('/api/profile/prefs', headers=ha)
        assert r.json() == {'name': 'Alice', 'locale': 'auto', 'theme': 'pastel'}

        r = await client.post('/api/profile/prefs', json={'name': 'Ali', 'locale': 'es', 'theme': 'ocean'}, headers=ha)
        assert r.json() == {'name': 'Ali', 'locale': 'es', 'theme': 'ocean'}

        r = await client.post('/api/profile/prefs', json={'name': 'Ali', 'locale': 'klingon', 'theme': 'neon'}, headers=ha)
        assert r.json() == {'name': 'Ali', 'locale': 'auto', 'theme': 'pastel'}

    @pytest.mark.asyncio
    async def test_friend_profile_is_gated(self, client, users):
        alice, ha = users['alice']
        bob, hb = users['bob']
        _, hc = users['carol']

        g1 = (await client.post('/api/goals', json={'title': 'Cook more'}, headers=hb)).json()
        await client.post('/api/goals', json={'title': 'Secret goal'}, headers=hb)
        await client.post(f"/api/goals/{g1['id']}/publish", headers=hb)
        await client.post('/api/feed', json={'content': 'Hello friends'}, headers=hb)

        assert (await client.get(f"/api/profile/{bob['id']}", headers=ha)).status_code == 403
        assert (await client.get('/api/profile/999', headers=ha)).status_code == 404

        await befriend(client, users, 'alice', 'bob')

        r = await client.get(f"/api/profile/{bob['id']}", headers=ha)
        assert r.status_code == 200, r.text
        body = r.json()
        assert body['profile']['email'] == 'bob@example.com'
        assert 'locale' not in body['profile']
        assert [g['title'] for g in body['goals']] == ['Cook more']
        assert [p['content'] for p in body['feed']] == ['Hello friends', 'New goal: Cook more']

        # friendship is not transitive
        assert (await client.get(f"/api/profile/{bob['id']}", headers=hc)).status_code == 403

    @pytest.mark.asyncio
    async def test_invite_conflict_over_http(self, client, users):
        _, ha = users['alice']
        _, hb = users['bob']

        first = await client.post('/api/friends/invite', json={'email': 'bob@example.com'}, headers=ha)
        assert first.status_code == 201

        reverse = await client.post('/api/friends/invite', json={'email': 'alice@example.com'}, headers=hb)
        assert reverse.status_code == 409
        assert reverse.json() == {'detail': 'Already invited or friends', 'status': 'pending'}

        assert (await client.post('/api/friends/invite', json={'email': 'alice@example.com'}, headers=ha)).status_code == 400
        assert (await client.post('/api/friends/invite', json={'email': 'ghost@example.com'}, headers=ha)).status_code == 404
        assert (await client.post('/api/friends/invite', json={'email': 'bad email'}, headers=ha)).status_code == 400

        _, hc = users['carol']
        fid = first.json()['friendship_id']
        assert (await client.post('/api/friends/accept', json={'friendship_id': fid}, headers=hc)).status_code == 403
        assert (await client.post('/api/friends/cancel', json={'friendship_id': fid}, headers=ha)).status_code == 200
        assert (await client.post('/api/friends/cancel', json={'friendship_id': fid}, headers=ha)).status_code == 404

    @pytest.mark.asyncio
    async def test_account_deletion_cascades(self, client, users):
        alice, ha = users['alice']
        bob, hb = users['bob']

        await befriend(client, users, 'alice', 'bob')
        post = (await client.post('/api/feed', json={'content': 'bye'}, headers=ha)).json()
        await client.post(f"/api/feed/{post['id']}/like", headers=hb)
        await client.post('/api/items', json={'title': 'Milk'}, headers=ha)
        await client.post('/api/dm/send', json={'friend_id': bob['id'], 'text': 'see you'}, headers=ha)

        r = await client.post('/api/profile/delete', headers=ha)
        assert r.status_code == 200
        assert r.json()['message'] == 'Account deleted'

        assert (await client.get('/api/auth/me', headers=ha)).status_code == 401
        assert (await client.get('/api/friends', headers=hb)).json() == []
        assert (await client.get('/api/feed', headers=hb)).json() == []
        assert (await client.get('/api/dm', params={'friend_id': alice['id']}, headers=hb)).status_code == 404

        # the email is free again
        again = await client.post('/api/auth/register', json={'email': 'alice@example.com', 'password': 'password123'})
        assert again.status_code == 201

    @pytest.mark.asyncio
    async def test_item_quantity_input_is_clamped_not_rejected(self, client, users):
        _, ha = users['alice']
        cases = [('lots', 1), ('12', 12), (None, 1), (2.5, 2), (-3, 1)]
        for qty, expected in cases:
            r = await client.post('/api/items', json={'title': 'Flour', 'qty': qty}, headers=ha)
            assert r.status_code == 201, r.text
            assert r.json()['qty'] == expected, qty
