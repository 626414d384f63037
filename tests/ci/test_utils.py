"""Tests for lazy string helpers."""

import pytest

from navwait.utils import Stringer, to_string, url


def test_stringer_resolves_on_each_format():
	state = {'id': '1'}
	stringer = Stringer(lambda: f'order-{state["id"]}')

	first = str(stringer)
	state['id'] = '2'

	assert first == 'order-1'
	assert f'{stringer}' == 'order-2'


@pytest.mark.parametrize(
	'value,expected',
	[
		(None, ''),
		('plain', 'plain'),
		(Stringer(lambda: 'lazy'), 'lazy'),
		(lambda: 'called', 'called'),
		(42, '42'),
	],
)
def test_to_string(value, expected):
	assert to_string(value) == expected


def test_url_joins_endpoint_and_path():
	assert str(url('https://shop.example.com', '/checkout')) == 'https://shop.example.com/checkout'


def test_url_formats_values_when_resolved():
	order = {'id': None}
	target = url('https://shop.example.com:8443', '/orders/%s/items/%s', lambda: order['id'], 7)

	order['id'] = 'A17'

	assert str(target) == 'https://shop.example.com:8443/orders/A17/items/7'


def test_url_requires_absolute_endpoint():
	with pytest.raises(ValueError):
		url('shop.example.com', '/checkout')
