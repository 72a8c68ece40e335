"""JavaScript runtime prelude for translated scripts.

The analyser rewrites array operators, ranges and number methods into calls
to these functions; the names must match the default translation tables.
"""

PRELUDE = """\
function add(a, b) {
	if (Array.isArray(a)) {
		return a.concat(Array.isArray(b) ? b : [b]);
	}
	return a + b;
}
function subtract(a, b) {
	if (Array.isArray(a)) {
		var removed = Array.isArray(b) ? b : [b];
		return a.filter(function (x) { return removed.indexOf(x) === -1; });
	}
	return a - b;
}
function multiply(a, b) {
	if (Array.isArray(a)) {
		var out = [];
		for (var i = 0; i < b; i++) {
			out = out.concat(a);
		}
		return out;
	}
	return a * b;
}
function leftShift(a, b) {
	if (Array.isArray(a)) {
		a.push(b);
		return a;
	}
	return a << b;
}
function range(low, high) {
	var out = [];
	var step = low <= high ? 1 : -1;
	for (var i = low; step > 0 ? i <= high : i >= high; i += step) {
		out.push(i);
	}
	return out;
}
function times(n, fn) {
	for (var i = 0; i < n; i++) {
		fn(i);
	}
}
"""


def with_prelude(output: str) -> str:
    return PRELUDE + "\n" + output + "\n"
