from __future__ import annotations

import json
from urllib.parse import quote

from py_mini_racer import MiniRacer

from lostfound.filter_script import FILTER_SCRIPT

# Just enough of window/document for the filter script to run in V8.
DOM_STUB = """
var replacedCount = 0;

function ClassList() { this.names = {}; }
ClassList.prototype.toggle = function (name, on) {
  if (on) { this.names[name] = true; } else { delete this.names[name]; }
};
ClassList.prototype.contains = function (name) { return !!this.names[name]; };

function El(area) {
  this.dataset = { area: area };
  this.hidden = false;
  this.classList = new ClassList();
  this.attrs = {};
  this.listeners = {};
}
El.prototype.setAttribute = function (k, v) { this.attrs[k] = v; };
El.prototype.addEventListener = function (type, fn) { this.listeners[type] = fn; };

var cards = CARD_AREAS.map(function (a) { return new El(a); });
var buttons = [new El('')].concat(BUTTON_AREAS.map(function (a) { return new El(a); }));
var counter = { textContent: '' };
var windowListeners = {};

var location = { pathname: '/', search: '', _hash: INITIAL_HASH };
Object.defineProperty(location, 'hash', {
  get: function () { return this._hash; },
  set: function (v) { this._hash = v ? (v.charAt(0) === '#' ? v : '#' + v) : ''; }
});

var window = {
  location: location,
  history: {
    replaceState: function () { replacedCount += 1; location._hash = ''; }
  },
  addEventListener: function (type, fn) { windowListeners[type] = fn; }
};

var document = {
  querySelectorAll: function (sel) {
    if (sel.indexOf('item-card') !== -1) return cards;
    if (sel.indexOf('area-filter') !== -1) return buttons;
    return [];
  },
  getElementById: function (id) { return id === 'visibleCount' ? counter : null; }
};

function clickArea(area) {
  buttons.filter(function (b) { return b.dataset.area === area; })[0].listeners.click();
}

function navigate(hash) {
  location.hash = hash;
  windowListeners.hashchange();
}

function snapshot() {
  return JSON.stringify({
    visible: cards.filter(function (c) { return !c.hidden; }).map(function (c) { return c.dataset.area; }),
    count: counter.textContent,
    hash: location.hash,
    active: buttons.filter(function (b) { return b.classList.contains('active'); }).map(function (b) { return b.dataset.area; }),
    replaced: replacedCount
  });
}
"""

CARDS = ["Kallio", "Töölö keskusta", "Kallio", "Arabia"]


def run_filter(steps: str = "", initial_hash: str = "", card_areas=CARDS) -> dict:
    ctx = MiniRacer()
    ctx.eval(
        f"var CARD_AREAS = {json.dumps(card_areas)};"
        f"var BUTTON_AREAS = {json.dumps(sorted(set(card_areas)))};"
        f"var INITIAL_HASH = {json.dumps(initial_hash)};"
    )
    ctx.eval(DOM_STUB)
    ctx.eval(FILTER_SCRIPT)
    if steps:
        ctx.eval(steps)
    return json.loads(ctx.eval("snapshot()"))


def area_hash(area: str) -> str:
    return "#area=" + quote(area, safe="")


def test_initial_state_shows_everything():
    state = run_filter()
    assert state["visible"] == CARDS
    assert state["count"] == "4"
    assert state["hash"] == ""
    assert state["active"] == [""]


def test_selecting_area_hides_other_cards_and_writes_fragment():
    state = run_filter("clickArea('Kallio');")
    assert state["visible"] == ["Kallio", "Kallio"]
    assert state["count"] == "2"
    assert state["hash"] == "#area=Kallio"
    assert state["active"] == ["Kallio"]


def test_fragment_is_percent_encoded():
    state = run_filter("clickArea('Töölö keskusta');")
    assert state["visible"] == ["Töölö keskusta"]
    assert state["hash"] == area_hash("Töölö keskusta")


def test_selecting_active_area_again_clears_filter():
    state = run_filter("clickArea('Kallio'); clickArea('Kallio');")
    assert state["visible"] == CARDS
    assert state["count"] == "4"
    assert state["hash"] == ""
    assert state["replaced"] == 1
    assert state["active"] == [""]


def test_all_areas_button_clears_filter():
    state = run_filter("clickArea('Arabia'); clickArea('');")
    assert state["visible"] == CARDS
    assert state["hash"] == ""
    assert state["active"] == [""]


def test_fragment_is_restored_on_load():
    state = run_filter(initial_hash=area_hash("Töölö keskusta"))
    assert state["visible"] == ["Töölö keskusta"]
    assert state["count"] == "1"
    assert state["active"] == ["Töölö keskusta"]


def test_hashchange_applies_new_area():
    state = run_filter(f"navigate({json.dumps(area_hash('Arabia'))});")
    assert state["visible"] == ["Arabia"]
    assert state["active"] == ["Arabia"]


def test_unknown_area_in_fragment_clears_filter():
    assert run_filter(initial_hash="#area=Nowhere")["visible"] == CARDS

    state = run_filter("clickArea('Kallio'); navigate('#area=Nowhere');")
    assert state["visible"] == CARDS
    assert state["count"] == "4"
    assert state["active"] == [""]


def test_malformed_fragment_is_ignored():
    state = run_filter(initial_hash="#area=%E0%A4%A")
    assert state["visible"] == CARDS
