"""
Go source templates for generated enum helpers.

Templates are plain ``str.format`` strings; literal Go braces are doubled.
"""
import json

HEADER_TEMPLATE = '''// Code generated by genum from {source}; DO NOT EDIT.

package {package}

{imports}
'''

SINGLE_IMPORT_TEMPLATE = 'import "{path}"'

MULTI_IMPORT_TEMPLATE = '''import (
{paths}
)'''

ENUM_TEMPLATE = '''
var _{type}Values = []{type}{{
{value_items}
}}

// {type}Values returns every {type} value in declaration order.
func {type}Values() []{type} {{
	return append([]{type}(nil), _{type}Values...)
}}

// String returns the text of a {type} value.
func (e {type}) String() string {{
	switch e {{
{string_cases}
	}}
	return {string_fallback}
}}

// IsValid reports whether e is one of the declared {type} values.
func (e {type}) IsValid() bool {{
	switch e {{
	case {valid_names}:
		return true
	}}
	return false
}}

// Parse{type} returns the {type} value whose text is s.
func Parse{type}(s string) ({type}, error) {{
{parse_body}
	var zero {type}
	return zero, fmt.Errorf("invalid {type}: %q", s)
}}

// MarshalText implements encoding.TextMarshaler.
func (e {type}) MarshalText() ([]byte, error) {{
	return []byte(e.String()), nil
}}

// UnmarshalText implements encoding.TextUnmarshaler.
func (e *{type}) UnmarshalText(text []byte) error {{
	v, err := Parse{type}(string(text))
	if err != nil {{
		return err
	}}
	*e = v
	return nil
}}
'''

VALUE_ITEM_TEMPLATE = '\t{name},'

STRING_CASE_TEMPLATE = '''	case {name}:
		return {text}'''

STRING_FALLBACK_STRING = 'string(e)'
STRING_FALLBACK_BASIC = 'fmt.Sprintf({prefix}, {base}(e))'
STRING_FALLBACK_OTHER = '{unknown}'

PARSE_SWITCH_TEMPLATE = '''	switch {subject} {{
{cases}
	}}'''

PARSE_CASE_TEMPLATE = '''	case {text}:
		return {name}, nil'''

PARSE_FOLD_TEMPLATE = '''	for _, v := range _{type}Values {{
		if strings.EqualFold(v.String(), s) {{
			return v, nil
		}}
	}}'''

PARSE_SUBJECTS = {
    'sensitive': 's',
    'lower': 'strings.ToLower(s)',
    'upper': 'strings.ToUpper(s)',
}


def go_quote(text: str) -> str:
    """Quote ``text`` as an interpreted Go string literal."""
    return json.dumps(text, ensure_ascii=False)
