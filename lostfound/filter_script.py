"""Inline script for the area filter.

Runs in the browser, not at build time. The only state is `selectedArea`
(a string or null); it drives card visibility, the active button, the
visible counter and the `#area=...` fragment. The fragment is read on load
and on `hashchange`, so a filtered view can be shared as a link.

Markup contract (produced by `render.render_area_filter` and the cards):
  - `.item-card[data-area]` cards inside `#itemsContainer`
  - `.area-filter[data-area]` buttons, and one `.area-filter[data-area=""]`
    button that clears the filter
  - `#visibleCount` element holding the number of visible cards
"""

AREA_PARAM = "area"

FILTER_SCRIPT = """
(function () {
  var HASH_PREFIX = '#%(param)s=';
  var selectedArea = null;

  var cards = Array.prototype.slice.call(document.querySelectorAll('#itemsContainer .item-card'));
  var buttons = Array.prototype.slice.call(document.querySelectorAll('.area-filter'));
  var counter = document.getElementById('visibleCount');

  var known = {};
  buttons.forEach(function (b) { if (b.dataset.area) known[b.dataset.area] = true; });

  function areaFromHash(hash) {
    if (!hash || hash.indexOf(HASH_PREFIX) !== 0) return null;
    try {
      var area = decodeURIComponent(hash.slice(HASH_PREFIX.length));
      return known[area] ? area : null;
    } catch (e) {
      return null;
    }
  }

  function writeHash(area) {
    var target = area ? HASH_PREFIX + encodeURIComponent(area) : '';
    if (window.location.hash === target) return;
    if (area) {
      window.location.hash = target;
    } else if (window.history && window.history.replaceState) {
      window.history.replaceState(null, '', window.location.pathname + window.location.search);
    } else {
      window.location.hash = '';
    }
  }

  function apply() {
    var visible = 0;
    cards.forEach(function (card) {
      var show = selectedArea === null || card.dataset.area === selectedArea;
      card.hidden = !show;
      if (show) visible += 1;
    });
    buttons.forEach(function (b) {
      var active = (b.dataset.area || null) === selectedArea;
      b.classList.toggle('active', active);
      b.setAttribute('aria-pressed', active ? 'true' : 'false');
    });
    if (counter) counter.textContent = String(visible);
  }

  function select(area) {
    selectedArea = area && area !== selectedArea ? area : null;
    writeHash(selectedArea);
    apply();
  }

  buttons.forEach(function (b) {
    b.addEventListener('click', function () { select(b.dataset.area || null); });
  });

  window.addEventListener('hashchange', function () {
    selectedArea = areaFromHash(window.location.hash);
    apply();
  });

  selectedArea = areaFromHash(window.location.hash);
  apply();
})();
""" % {"param": AREA_PARAM}
