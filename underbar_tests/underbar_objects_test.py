import suite
import underbar as _

case = suite.case
assert_that = suite.assert_that


@case("extend copies keys from every source and returns the target")
def test_extend_basic():
    target = {'key1': 'something'}
    returned = _.extend(target, {'key2': 'new', 'key3': 'else'}, {'bla': 'more'})
    assert_that(returned is target, "target is returned")
    assert_that(target == {'key1': 'something', 'key2': 'new', 'key3': 'else', 'bla': 'more'}, f"got {target}")


@case("extend lets later sources win")
def test_extend_overwrite():
    target = {'a': 1}
    _.extend(target, {'a': 2, 'b': 2}, {'b': 3})
    assert_that(target == {'a': 2, 'b': 3}, f"got {target}")


@case("extend with no sources leaves the target alone")
def test_extend_no_sources():
    target = {'a': 1}
    assert_that(_.extend(target) == {'a': 1}, "unchanged")


@case("extend does not modify the sources")
def test_extend_sources_untouched():
    source = {'x': 1}
    _.extend({'x': 0, 'y': 2}, source)
    assert_that(source == {'x': 1}, "source unchanged")


@case("defaults only fills missing keys")
def test_defaults_basic():
    target = {'flavor': 'chocolate'}
    returned = _.defaults(target, {'flavor': 'vanilla', 'sprinkles': 'lots'})
    assert_that(returned is target, "target is returned")
    assert_that(target == {'flavor': 'chocolate', 'sprinkles': 'lots'}, f"got {target}")


@case("defaults keeps the first value offered for a key")
def test_defaults_first_wins():
    target = {}
    _.defaults(target, {'a': 1}, {'a': 2, 'b': 2}, {'b': 3, 'c': 3})
    assert_that(target == {'a': 1, 'b': 2, 'c': 3}, f"got {target}")


@case("defaults respects keys that hold falsy values")
def test_defaults_falsy_values():
    target = {'zero': 0, 'empty': '', 'none': None}
    _.defaults(target, {'zero': 1, 'empty': 'x', 'none': 'y'})
    assert_that(target == {'zero': 0, 'empty': '', 'none': None}, f"got {target}")


@case("extend and defaults reject non-mapping arguments")
def test_objects_type_errors():
    suite.raises(TypeError, _.extend, [1, 2], {'a': 1})
    suite.raises(TypeError, _.defaults, {}, [('a', 1)])


if __name__ == "__main__":
    suite.run(title="underbar object helpers")
