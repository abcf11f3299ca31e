"""
Trimmed-down copies of the chamber pages, enough for the selectors in use.
"""

# ── Diputados ────────────────────────────────────────────────────────────────

DIPUTADOS_LISTING = """
<html><body>
<select id="select-ano">
  <option value="2018">2018</option>
  <option value="2019" selected>2019</option>
</select>
<div class="table-responsive">
<table>
<tbody id="container-actas">
  <tr class="row-acta" data-date="1552521600">
    <td>14/03/2019</td>
    <td>Sesión Especial -
        Ley de Financiamiento
        <a id="exp-1" href="#">(Ocultar expedientes)</a>
        <div tituloexpediente="Proyecto de ley de financiamiento" identificador="0012-PE-2019">
          0012-PE-2019
        </div>
    </td>
    <td>EN GENERAL</td>
    <td>AFIRMATIVO</td>
    <td><center><button>Acta</button><button urldetalle="/votacion/1">Detalle</button></center></td>
  </tr>
  <tr class="row-acta" data-date="1552608000">
    <td>15/03/2019</td>
    <td>Moción de preferencia</td>
    <td>MOCION</td>
    <td>NEGATIVO</td>
    <td><center><button>Acta</button><button urldetalle="/votacion/2">Detalle</button></center></td>
  </tr>
</tbody>
</table>
</div>
</body></html>
"""

_COLLAPSED_ROW = """
<html><body>
<select id="select-ano"><option value="2019">2019</option></select>
<div class="table-responsive">
<table>
<tbody id="container-actas">
  <tr class="row-acta" data-date="1552521600">
    <td>14/03/2019</td>
    <td>Presupuesto 2019 <a id="exp-7" href="#">(Ver expedientes)</a>{panel}</td>
    <td>EN GENERAL</td>
    <td>AFIRMATIVO</td>
    <td><center><button>Acta</button><button urldetalle="/votacion/7">Detalle</button></center></td>
  </tr>
</tbody>
</table>
</div>
</body></html>
"""

DIPUTADOS_LISTING_COLLAPSED = _COLLAPSED_ROW.format(panel="")
DIPUTADOS_LISTING_REVEALED = _COLLAPSED_ROW.format(
    panel='<div tituloexpediente="Presupuesto general" identificador="0001-PE-2018"></div>'
    '<div tituloexpediente="Modificación" identificador="0002-PE-2018"></div>'
)

DETAIL_PAGE = """
<html><body>
<div class="container-fluid">
  <div>
    <div class="row"><div><h5>Período 137 - Reunión 5 - Acta 3</h5></div></div>
  </div>
  <div class="white-box">
    <div id="custom-share"><h4>Presidente: <b>MONZÓ, Emilio</b></h4></div>
    <div><p>Sesión especial</p></div>
    <div>
      <h5><a href="/actas/acta-3.pdf">Ver acta</a></h5>
      <div class="row">
        <div><ul><h3>128</h3></ul></div>
        <div><ul><h3>99</h3></ul></div>
        <div><ul><h3>2</h3></ul></div>
        <div><ul><h3>28</h3></ul></div>
      </div>
    </div>
  </div>
  <a title="Descargar datos en CSV" href="#">CSV</a>
</div>
{votes}
</body></html>
"""

DETAIL_PAGE_NO_COUNTS = """
<html><body>
<div class="container-fluid">
  <div>
    <div class="row"><div><h5>Período 137 - Reunión 6 - Acta 4</h5></div></div>
  </div>
  <div class="white-box">
    <div id="custom-share"><h4>Presidente: <b>MONZÓ, Emilio</b></h4></div>
  </div>
</div>
</body></html>
"""

# ── Senadores ────────────────────────────────────────────────────────────────

_SENADORES_ROW = """
  <tr>
    <td><span>{date}</span>{date}</td>
    <td>{record}</td>
    <td>O.D. {record}/2019,
        Art. 4 <a href="#">Ver Expedientes</a>
        <div><a href="/parlamentario/expediente/{id}">S-{id}/19</a></div>
    </td>
    <td>EN GENERAL</td>
    <td><div>{result}</div></td>
    <td><a href="/votaciones/actas/acta-{id}.pdf">Acta</a></td>
    <td><a href="/votaciones/detalleActa/{id}">Detalle</a></td>
    <td>{video}</td>
  </tr>
"""


def senadores_row(voting_id, result, date="20190314", record=3, video=True):
    return _SENADORES_ROW.format(
        id=voting_id,
        result=result,
        date=date,
        record=record,
        video=f'<a href="https://youtube.com/watch?v={voting_id}">Video</a>' if video else "",
    )


def senadores_listing(rows, next_disabled=True):
    next_class = "paginate_button next disabled" if next_disabled else "paginate_button next"
    return f"""
<html><body>
<select id="busqueda_actas_anio">
  <option value="2018">2018</option>
  <option value="2019">2019</option>
</select>
<input type="submit" title="Realizar Búsqueda" value="Buscar">
<select name="actasTable_length">
  <option value="10">10</option><option value="100">100</option>
</select>
<table id="actasTable">
<tbody>
{"".join(rows)}
</tbody>
</table>
<a class="{next_class}" id="actasTable_next">Siguiente</a>
</body></html>
"""


SENADORES_VOTES = """
<select name="votosTable_length">
  <option value="10">10</option><option value="-1">Todos</option>
</select>
<table id="votosTable">
<tbody>
  <tr>
    <td><img src="/bundles/senadores/images/fsena/123.gif"></td>
    <td><a href="/senadores/senador/123">PICHETTO, Miguel Ángel</a></td>
    <td>Justicialista</td>
    <td>RIO NEGRO</td>
    <td>AFIRMATIVO</td>
    <td><a href="https://youtube.com/watch?v=v123">Video</a></td>
  </tr>
  <tr>
    <td></td>
    <td>FERNÁNDEZ, Cristina</td>
    <td>Frente para la Victoria</td>
    <td>BUENOS AIRES</td>
    <td>NEGATIVO</td>
    <td></td>
  </tr>
</tbody>
</table>
"""
