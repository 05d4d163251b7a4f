''' Style sheet for HTML statistics reports '''

css = '''
body {
  font-family: sans-serif;
  font-size: 16px;
  line-height: 1.6;
  padding: 1em;
  margin: auto;
  max-width: 48em;
}

h1, h2, h3, h4 {
  font-family: sans-serif;
  line-height: 125%;
  margin-top: 1.5em;
  font-weight: normal;
}

h1 {
  font-size: 2em;
}

h2 {
  font-size: 1.6em;
}

h3 {
  font-size: 1.3em;
}

table {
    margin: 10px 5px;
    border-collapse: collapse;
 }

th {
    background-color: #eee;
    font-weight: bold;
}

th, td {
    border: 1px solid lightgray;
    padding: .2em 1em;
    text-align: right;
}'''
